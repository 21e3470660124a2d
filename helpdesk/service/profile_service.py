from typing import Optional
import logging

from helpdesk.errors import ConflictError
from helpdesk.models.profile import Profile

logger = logging.getLogger(__name__)


class ProfileService:
    def __init__(self, profile_store):
        self.store = profile_store

    def get_profile(self, user_id: str) -> Optional[Profile]:
        return self.store.find_by_id(user_id)

    def get_or_create(self, user_id: str) -> Profile:
        """Load the user's profile, creating a default USER profile on first sight."""
        profile = self.store.find_by_id(user_id)
        if profile:
            return profile

        try:
            profile = self.store.create(Profile.default_for(user_id))
            logger.info(f"Created default profile for user {user_id[:8]}...")
            return profile
        except ConflictError:
            # Another request created it first
            return self.store.find_by_id(user_id)

    def is_admin(self, user_id: str) -> bool:
        return self.get_or_create(user_id).is_admin
