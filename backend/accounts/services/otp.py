import logging
import secrets
import smtplib
from datetime import timedelta

from django.conf import settings
from django.utils import timezone
from rest_framework.exceptions import APIException

from accounts.models import EmailOTP
from accounts.services.emails import send_otp_email

logger = logging.getLogger(__name__)


class OTPDeliveryFailed(APIException):
    status_code = 500
    default_detail = "Failed to send OTP email"
    default_code = "otp_delivery_failed"


def generate_otp() -> str:
    return f"{secrets.randbelow(1_000_000):06d}"


def issue_otp(email: str, **email_kwargs) -> EmailOTP:
    """Store a fresh code for `email` (replacing any previous one) and email it."""

    code = generate_otp()
    otp, _ = EmailOTP.objects.update_or_create(
        email=email,
        defaults={
            "code": code,
            "expires_at": timezone.now() + timedelta(minutes=settings.OTP_TTL_MINUTES),
        },
    )
    try:
        send_otp_email(email=email, code=code, **email_kwargs)
    except (smtplib.SMTPException, OSError) as exc:
        logger.exception("OTP email to %s failed", email)
        raise OTPDeliveryFailed() from exc
    return otp


def check_otp(email: str, code: str) -> EmailOTP | None:
    """Return the stored OTP if `code` matches and is still live."""

    otp = EmailOTP.objects.filter(email=email, code=code).first()
    if otp is None or otp.is_expired:
        return None
    return otp


def consume_otp(email: str, code: str) -> bool:
    otp = check_otp(email, code)
    if otp is None:
        return False
    otp.delete()
    return True
