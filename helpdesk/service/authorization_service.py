from typing import Optional
import logging

from helpdesk.models.profile import Profile
from helpdesk.service.auth_service import Session

logger = logging.getLogger(__name__)


class AuthorizationGate:
    """
    Decides whether a credential belongs to an admin.

    Two lookups: session from the auth service, then the profile by user id.
    Nothing is cached; a role change takes effect on the next request.
    Store failures during the profile lookup propagate to the caller.
    """

    def __init__(self, auth_service, profile_store):
        self.auth_service = auth_service
        self.profile_store = profile_store

    def admin_session(self, credential: Optional[str]) -> Optional[Session]:
        """The caller's session if they are an admin, otherwise None."""
        session = self.auth_service.get_session(credential)
        if not session:
            return None

        profile: Optional[Profile] = self.profile_store.find_by_id(session.user_id)
        if not profile:
            logger.info(f"No profile for user {session.user_id[:8]}..., denying admin access")
            return None

        return session if profile.is_admin else None

    def is_authorized(self, credential: Optional[str]) -> bool:
        return self.admin_session(credential) is not None
