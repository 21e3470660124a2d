"""
Models package for the helpdesk API.
"""

from helpdesk.models.base_model import BaseModel
from helpdesk.models.profile import Profile
from helpdesk.models.support_label import SupportLabel, TicketLabel

__all__ = [
    'BaseModel',
    'Profile',
    'SupportLabel',
    'TicketLabel',
]
