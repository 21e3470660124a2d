"""
In-memory store used when DEV_MODE=true and by the test suite.

Implements the same interface as the Supabase stores and enforces the
same constraints the database does: unique (ticket_id, label_id) pairs,
unique label names, and cascading removal of a label's associations.
Tickets are not modelled, so association inserts never fail on a
foreign key.
"""

from typing import Dict, List, Optional
import logging
import threading
import uuid

from helpdesk.errors import ConflictError, NotFoundError
from helpdesk.models.profile import Profile
from helpdesk.models.support_label import SupportLabel, TicketLabel
from helpdesk.utils.constants import DEV_USER_ID, ROLE_ADMIN

logger = logging.getLogger(__name__)


class MemoryStore:
    def __init__(self, seed: bool = False):
        self._lock = threading.Lock()
        self.profiles: Dict[str, Profile] = {}
        self.labels: Dict[str, SupportLabel] = {}
        self.associations: List[TicketLabel] = []

        if seed:
            self.seed()

    def seed(self) -> None:
        """Give the dev user an admin profile and add two sample labels."""
        admin = Profile()
        admin.id = DEV_USER_ID
        admin.role = ROLE_ADMIN
        self.profiles[admin.id] = admin

        self.create_label("bug", "#ef4444")
        self.create_label("feature", "#22c55e")
        logger.info("Seeded in-memory store with dev admin profile and sample labels")

    def reset(self) -> None:
        with self._lock:
            self.profiles.clear()
            self.labels.clear()
            self.associations = []

    # Profiles

    def find_by_id(self, user_id: str) -> Optional[Profile]:
        with self._lock:
            return self.profiles.get(user_id)

    def create(self, profile: Profile) -> Profile:
        with self._lock:
            if profile.id in self.profiles:
                raise ConflictError("Profile already exists")
            self.profiles[profile.id] = profile
        return profile

    def ping(self) -> None:
        pass

    # Label catalog

    def list_labels(self) -> List[SupportLabel]:
        with self._lock:
            labels = list(self.labels.values())
        return sorted(labels, key=lambda label: label.name)

    def create_label(self, name: str, color: str) -> SupportLabel:
        with self._lock:
            if any(label.name == name for label in self.labels.values()):
                raise ConflictError("Label already exists")

            label = SupportLabel()
            label.id = str(uuid.uuid4())
            label.name = name
            label.color = color
            self.labels[label.id] = label
        return label

    def delete_label(self, label_id: str) -> None:
        with self._lock:
            if self.labels.pop(label_id, None) is None:
                raise NotFoundError("Label not found")
            self.associations = [a for a in self.associations if a.label_id != label_id]

    # Ticket associations

    def create_association(self, ticket_id: str, label_id: str) -> TicketLabel:
        association = TicketLabel.of(ticket_id, label_id)
        with self._lock:
            if any(a.key == association.key for a in self.associations):
                raise ConflictError("Label is already attached to this ticket")
            self.associations.append(association)
        return TicketLabel.of(ticket_id, label_id)

    def delete_association(self, ticket_id: str, label_id: str) -> None:
        with self._lock:
            for index, association in enumerate(self.associations):
                if association.key == (ticket_id, label_id):
                    del self.associations[index]
                    return
        raise NotFoundError("Label is not attached to this ticket")

    def list_associations(self, ticket_id: str) -> List[TicketLabel]:
        associations = []
        with self._lock:
            for stored in self.associations:
                if stored.ticket_id != ticket_id:
                    continue
                association = TicketLabel.of(stored.ticket_id, stored.label_id)
                association.label = self.labels.get(stored.label_id)
                associations.append(association)
        return associations
