from typing import Any, List
import logging

from helpdesk.errors import ValidationError
from helpdesk.models.support_label import SupportLabel, TicketLabel

logger = logging.getLogger(__name__)


def _require(value: Any, field: str) -> str:
    """A required identifier must be a non-empty string once surrounding whitespace is dropped."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError.required(field)
    return value.strip()


class LabelService:
    """
    Label catalog and ticket/label associations.

    Callers are expected to have passed the admin gate already. Existence of
    the ticket and label is left to the store's foreign keys, and duplicates
    and missing rows surface as ConflictError / NotFoundError from the store.
    """

    def __init__(self, label_store):
        self.store = label_store

    # Ticket associations

    def associate(self, ticket_id: str, label_id: Any) -> TicketLabel:
        label_id = _require(label_id, "labelId")
        association = self.store.create_association(ticket_id, label_id)
        logger.info(f"Attached label {label_id} to ticket {ticket_id}")
        return association

    def disassociate(self, ticket_id: str, label_id: Any) -> None:
        label_id = _require(label_id, "labelId")
        self.store.delete_association(ticket_id, label_id)
        logger.info(f"Detached label {label_id} from ticket {ticket_id}")

    def list_ticket_labels(self, ticket_id: str) -> List[TicketLabel]:
        return self.store.list_associations(ticket_id)

    # Label catalog

    def list_labels(self) -> List[SupportLabel]:
        return self.store.list_labels()

    def create_label(self, name: Any, color: Any) -> SupportLabel:
        if not isinstance(name, str) or not name.strip() or not isinstance(color, str) or not color.strip():
            raise ValidationError("Name and color are required")

        label = self.store.create_label(name.strip(), color.strip())
        logger.info(f"Created support label '{label.name}' ({label.id})")
        return label

    def delete_label(self, label_id: Any) -> None:
        if not isinstance(label_id, str) or not label_id.strip():
            raise ValidationError("ID is required")

        self.store.delete_label(label_id)
        logger.info(f"Deleted support label {label_id}")
