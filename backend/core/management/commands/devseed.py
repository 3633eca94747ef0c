from datetime import timedelta
from decimal import Decimal

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from django.utils import timezone

from accounts.models import User
from bookings.models import Booking
from bookings.services.lifecycle import create_booking, respond_to_booking
from notifications.services import notify
from posts.models import Post, Reaction
from reviews.models import Review
from reviews.services import refresh_post_rating


SEED_PASSWORD = "Wayfarer123!"
SUPERUSER_EMAIL = "admin@wayfarer.test"
SUPERUSER_PASSWORD = "AdminWayfarer123!"

SEED_POST_TITLES = [
    "Three Days in Kyoto",
    "Sunrise on Mount Batur",
    "Annapurna Base Camp Trek",
    "Airport Transfer & City Guide",
    "Lisbon Food Crawl",
]


class Command(BaseCommand):
    help = "Populate the local development database with sample data."

    def handle(self, *args, **options):
        if not settings.DEBUG:
            raise CommandError("Refusing to seed data while DEBUG is False.")

        with transaction.atomic():
            self.stdout.write(self.style.MIGRATE_HEADING("Creating users"))
            hana = self._ensure_user(
                email="hana@wayfarer.test",
                first_name="Hana",
                last_name="Host",
                role=User.HOST,
                city="Kyoto",
                country="Japan",
            )
            pema = self._ensure_user(
                email="pema@wayfarer.test",
                first_name="Pema",
                last_name="Sherpa",
                role=User.HOST,
                city="Pokhara",
                country="Nepal",
            )
            gus = self._ensure_user(email="gus@wayfarer.test", first_name="Gus", last_name="Guest", role=User.GUEST)
            greta = self._ensure_user(
                email="greta@wayfarer.test", first_name="Greta", last_name="Globetrotter", role=User.GUEST
            )

            self.stdout.write(self.style.MIGRATE_HEADING("Ensuring admin superuser"))
            self._ensure_superuser()

            self.stdout.write(self.style.MIGRATE_HEADING("Cleaning old sample posts"))
            Post.objects.filter(user__in=[hana, pema], title__in=SEED_POST_TITLES).delete()
            Booking.objects.filter(host__in=[hana, pema]).delete()
            Review.objects.filter(host__in=[hana, pema]).delete()

            self.stdout.write(self.style.MIGRATE_HEADING("Creating posts"))
            kyoto = self._create_post(
                user=hana,
                post_type=Post.PLAN,
                title="Three Days in Kyoto",
                city="Kyoto",
                country="Japan",
                price_per_person=Decimal("180.00"),
                duration_days=3,
                difficulty="easy",
                tags=["culture", "food"],
                categories=["city"],
            )
            batur = self._create_post(
                user=hana,
                post_type=Post.EXPERIENCE,
                title="Sunrise on Mount Batur",
                city="Kintamani",
                country="Indonesia",
                price_per_person=Decimal("50.00"),
                difficulty="moderate",
                categories=["nature"],
            )
            annapurna = self._create_post(
                user=pema,
                post_type=Post.TREK,
                title="Annapurna Base Camp Trek",
                city="Pokhara",
                country="Nepal",
                price_total=Decimal("950.00"),
                duration_days=10,
                difficulty="hard",
                categories=["mountains"],
            )
            self._create_post(
                user=pema,
                post_type=Post.SERVICE,
                title="Airport Transfer & City Guide",
                city="Kathmandu",
                country="Nepal",
                price_amount=Decimal("35.00"),
            )
            self._create_post(
                user=hana,
                post_type=Post.PLAN,
                title="Lisbon Food Crawl",
                city="Lisbon",
                country="Portugal",
                status=Post.DRAFT,
            )

            self.stdout.write(self.style.MIGRATE_HEADING("Creating bookings"))
            start = timezone.localdate() + timedelta(days=21)
            create_booking(guest=gus, post_id=kyoto.pk, number_of_people=2, start_date=start)
            accepted = create_booking(
                guest=greta,
                post_id=batur.pk,
                number_of_people=3,
                start_date=start + timedelta(days=7),
                guest_message="Can we bring a toddler?",
            )
            respond_to_booking(
                booking_id=accepted.pk,
                user=hana,
                status=Booking.ACCEPTED,
                host_response="Yes, carriers are provided.",
            )
            declined = create_booking(
                guest=gus,
                post_id=annapurna.pk,
                number_of_people=1,
                start_date=start + timedelta(days=30),
                end_date=start + timedelta(days=40),
            )
            respond_to_booking(
                booking_id=declined.pk,
                user=pema,
                status=Booking.DECLINED,
                host_response="Fully booked for that window.",
            )

            self.stdout.write(self.style.MIGRATE_HEADING("Creating reviews & reactions"))
            for reviewer, host, post, rating, comment in [
                (gus, hana, kyoto, 5, "Hana knew every hidden temple."),
                (greta, hana, batur, 4, "Cold start, stunning sunrise."),
                (greta, pema, annapurna, 5, "Best guide in the Himalaya."),
            ]:
                Review.objects.create(reviewer=reviewer, host=host, post=post, rating=rating, comment=comment)
                refresh_post_rating(post)
            Reaction.objects.create(post=kyoto, user=greta, emoji="❤️", name=greta.full_name)
            Reaction.objects.create(post=kyoto, user=gus, emoji="🔥", name=gus.full_name)

            notify(
                recipient=gus,
                title="Welcome to Wayfarer",
                message="Browse itineraries and request your first trip.",
            )

        self.stdout.write(self.style.SUCCESS("Development seed data created."))
        self.stdout.write(self.style.NOTICE(f"Sample login accounts use password: {SEED_PASSWORD}"))
        self.stdout.write(self.style.NOTICE(f"Admin superuser {SUPERUSER_EMAIL} password: {SUPERUSER_PASSWORD}"))

    def _ensure_user(
        self,
        email: str,
        first_name: str,
        last_name: str,
        role: str,
        city: str = "",
        country: str = "",
    ) -> User:
        user, created = User.objects.get_or_create(
            email=email,
            defaults={
                "username": email,
                "first_name": first_name,
                "last_name": last_name,
                "role": role,
                "city": city,
                "country": country,
                "is_verified": True,
            },
        )
        if created:
            user.set_password(SEED_PASSWORD)
            user.save()
        else:
            fields_to_update = {}
            if user.role != role:
                fields_to_update["role"] = role
            if user.first_name != first_name:
                fields_to_update["first_name"] = first_name
            if user.last_name != last_name:
                fields_to_update["last_name"] = last_name
            if fields_to_update:
                for attr, value in fields_to_update.items():
                    setattr(user, attr, value)
                user.save(update_fields=list(fields_to_update.keys()))
            if not user.has_usable_password():
                user.set_password(SEED_PASSWORD)
                user.save(update_fields=["password"])
        return user

    def _create_post(self, *, user: User, post_type: str, title: str, **fields) -> Post:
        fields.setdefault("description", f"Sample listing for {title}.")
        return Post.objects.create(user=user, post_type=post_type, title=title, **fields)

    def _ensure_superuser(self) -> User:
        user, created = User.objects.get_or_create(
            email=SUPERUSER_EMAIL,
            defaults={
                "username": SUPERUSER_EMAIL,
                "first_name": "Admin",
                "last_name": "User",
                "role": User.ADMIN,
                "is_verified": True,
                "is_staff": True,
                "is_superuser": True,
            },
        )
        flag_updates = {}
        if not user.is_staff:
            flag_updates["is_staff"] = True
        if not user.is_superuser:
            flag_updates["is_superuser"] = True
        if user.role != User.ADMIN:
            flag_updates["role"] = User.ADMIN
        if flag_updates:
            for attr, value in flag_updates.items():
                setattr(user, attr, value)
            user.save(update_fields=list(flag_updates.keys()))
        if created or not user.has_usable_password():
            user.set_password(SUPERUSER_PASSWORD)
            user.save(update_fields=["password"])
        return user
