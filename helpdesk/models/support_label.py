from typing import Optional, Dict, Any

from helpdesk.models.base_model import BaseModel


class SupportLabel(BaseModel):
    """
    A label that can be attached to support tickets.
    Maps to the support_labels table.
    """

    def __init__(self):
        self.id: str = None
        self.name: str = None
        self.color: str = None


class TicketLabel(BaseModel):
    """
    Association between one ticket and one label.
    Maps to the support_tickets_labels table, keyed by (ticket_id, label_id).
    """

    _related_fields = ('label',)

    def __init__(self):
        self.ticket_id: str = None
        self.label_id: str = None

        # Related data (populated when listing a ticket's labels)
        self.label: Optional[SupportLabel] = None

    @classmethod
    def of(cls, ticket_id: str, label_id: str) -> "TicketLabel":
        association = cls()
        association.ticket_id = ticket_id
        association.label_id = label_id
        return association

    @property
    def key(self) -> tuple:
        return (self.ticket_id, self.label_id)

    def to_response(self) -> Dict[str, Any]:
        """Association with its label embedded, as returned by listing endpoints."""
        data = self.to_dict()
        data['label'] = self.label.to_dict() if self.label else None
        return data
