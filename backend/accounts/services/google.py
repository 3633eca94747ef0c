from __future__ import annotations

import logging
from dataclasses import dataclass

import requests
from django.conf import settings
from rest_framework.exceptions import APIException

logger = logging.getLogger(__name__)


class GoogleAuthFailed(APIException):
    status_code = 502
    default_detail = "Could not verify the Google account."
    default_code = "google_auth_failed"


@dataclass
class GoogleProfile:
    email: str
    given_name: str
    family_name: str
    picture: str
    sub: str


def fetch_google_profile(access_token: str) -> GoogleProfile:
    """Exchange a Google OAuth access token for the account's basic profile."""

    try:
        response = requests.get(
            settings.GOOGLE_USERINFO_URL,
            headers={"Authorization": f"Bearer {access_token}"},
            timeout=settings.GOOGLE_REQUEST_TIMEOUT,
        )
        response.raise_for_status()
        payload = response.json()
    except (requests.RequestException, ValueError) as exc:
        logger.warning("Google userinfo lookup failed: %s", exc)
        raise GoogleAuthFailed() from exc

    email = (payload.get("email") or "").strip().lower()
    if not email:
        raise GoogleAuthFailed("Google account has no email address.")

    return GoogleProfile(
        email=email,
        given_name=payload.get("given_name") or "",
        family_name=payload.get("family_name") or "",
        picture=payload.get("picture") or "",
        sub=payload.get("sub") or "",
    )
