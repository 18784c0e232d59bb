"""
Signed tokens for the unsubscribe link in notification emails.

Tokens carry the recipient's uid and are verified statelessly with
itsdangerous; they expire after 90 days.
"""

import hashlib
import os
from typing import Optional

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

UNSUBSCRIBE_SALT = "content-notifications-unsubscribe"
DEFAULT_MAX_AGE_DAYS = 90


def _get_serializer() -> URLSafeTimedSerializer:
    """
    Raises:
        ValueError: If UNSUBSCRIBE_SECRET_KEY environment variable not set
    """
    secret_key = os.getenv("UNSUBSCRIBE_SECRET_KEY")
    if not secret_key:
        raise ValueError("UNSUBSCRIBE_SECRET_KEY environment variable must be set.")

    return URLSafeTimedSerializer(
        secret_key,
        salt=UNSUBSCRIBE_SALT,
        signer_kwargs={"digest_method": hashlib.sha256},
    )


def generate_unsubscribe_token(uid: int) -> str:
    """Sign a recipient uid into a URL-safe token."""
    return _get_serializer().dumps(uid)


def validate_unsubscribe_token(
    token: str, max_age_days: int = DEFAULT_MAX_AGE_DAYS
) -> Optional[int]:
    """
    Verify a token and return the uid it was issued for.

    Returns:
        uid if the token is valid, None if tampered, expired or malformed
    """
    try:
        uid = _get_serializer().loads(token, max_age=max_age_days * 24 * 60 * 60)
    except (BadSignature, SignatureExpired, ValueError, TypeError):
        return None

    return uid if isinstance(uid, int) else None


def build_unsubscribe_url(base_url: str, uid: int) -> str:
    """Absolute unsubscribe link for a recipient."""
    token = generate_unsubscribe_token(uid)
    return f"{base_url.rstrip('/')}/notifications/unsubscribe?token={token}"
