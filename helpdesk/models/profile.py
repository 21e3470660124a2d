from typing import Optional
from datetime import datetime

from helpdesk.models.base_model import BaseModel
from helpdesk.utils.constants import ROLE_ADMIN, ROLE_USER


class Profile(BaseModel):
    """
    Per-user authorization record.
    Maps to the profiles table; id is the auth user id.
    """

    ROLE_ADMIN = ROLE_ADMIN
    ROLE_USER = ROLE_USER

    def __init__(self):
        self.id: str = None
        self.role: Optional[str] = None
        self.created_at: Optional[datetime] = None
        self.updated_at: Optional[datetime] = None

    @property
    def is_admin(self) -> bool:
        return self.role == self.ROLE_ADMIN

    @classmethod
    def default_for(cls, user_id: str) -> "Profile":
        """Profile given to a user on first sight."""
        profile = cls()
        profile.id = user_id
        profile.role = cls.ROLE_USER
        return profile
