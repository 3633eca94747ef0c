from __future__ import annotations

from django.conf import settings
from django.core.mail import send_mail


def send_otp_email(
    *,
    email: str,
    code: str,
    subject: str = "Verify your email - OTP",
    heading: str = "Email Verification",
):
    ttl = settings.OTP_TTL_MINUTES
    body_lines = [
        heading,
        "",
        f"Your one-time passcode is: {code}",
        "",
        f"The code expires in {ttl} minutes. If you did not request it, you can ignore this email.",
        "",
        "The Wayfarer Team",
    ]
    send_mail(
        subject,
        "\n".join(body_lines),
        settings.DEFAULT_FROM_EMAIL,
        [email],
        fail_silently=False,
    )
