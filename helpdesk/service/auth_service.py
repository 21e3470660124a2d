"""
Session resolution.

An auth service turns an opaque credential (a Supabase access token) into
a Session, or None when the credential is absent, expired or forged.
"""

from dataclasses import dataclass
from typing import Optional
import logging

import jwt

from helpdesk.utils.constants import DEV_USER_EMAIL, DEV_USER_ID

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Session:
    user_id: str
    email: Optional[str] = None


class SupabaseAuthService:
    """Verifies Supabase-issued JWTs locally with the project's JWT secret."""

    AUDIENCE = "authenticated"

    def __init__(self, jwt_secret: Optional[str]):
        self.jwt_secret = jwt_secret or ""
        if not self.jwt_secret:
            logger.warning("SUPABASE_JWT_SECRET is not set, every session will be rejected")

    def get_session(self, credential: Optional[str]) -> Optional[Session]:
        if not credential or not self.jwt_secret:
            return None

        try:
            payload = jwt.decode(
                credential,
                self.jwt_secret,
                algorithms=["HS256"],
                audience=self.AUDIENCE,
            )
        except jwt.ExpiredSignatureError:
            logger.debug("JWT expired")
            return None
        except jwt.InvalidTokenError as e:
            logger.debug(f"JWT validation failed: {e}")
            return None

        user_id = payload.get("sub")
        if not user_id:
            return None
        return Session(user_id=user_id, email=payload.get("email"))


class DevAuthService:
    """DEV_MODE stand-in: every request is signed in as the local dev user."""

    def get_session(self, credential: Optional[str]) -> Optional[Session]:
        return Session(user_id=DEV_USER_ID, email=DEV_USER_EMAIL)
