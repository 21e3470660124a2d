"""
Supabase-backed stores for profiles, support labels and ticket/label links.

PostgREST failures are translated into the helpdesk error taxonomy:
unique violations become ConflictError, foreign key violations and
deletes that matched nothing become NotFoundError, and transport errors
become StoreUnavailableError.
"""

from typing import List, Optional
import logging

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from helpdesk.errors import ConflictError, NotFoundError, StoreError, StoreUnavailableError
from helpdesk.models.profile import Profile
from helpdesk.models.support_label import SupportLabel, TicketLabel

logger = logging.getLogger(__name__)

# Postgres SQLSTATE codes surfaced by PostgREST
UNIQUE_VIOLATION = '23505'
FOREIGN_KEY_VIOLATION = '23503'
INVALID_TEXT_REPRESENTATION = '22P02'  # malformed uuid


def _execute(query, conflict_message: str = None, missing_message: str = None):
    """Run a PostgREST query, classifying failures."""
    try:
        return query.execute()
    except APIError as e:
        if e.code == UNIQUE_VIOLATION and conflict_message:
            raise ConflictError(conflict_message) from e
        if e.code in (FOREIGN_KEY_VIOLATION, INVALID_TEXT_REPRESENTATION) and missing_message:
            raise NotFoundError(missing_message) from e
        logger.error(f"Supabase query failed ({e.code}): {e.message}")
        raise StoreError() from e
    except httpx.HTTPError as e:
        logger.error(f"Supabase unreachable: {e}")
        raise StoreUnavailableError() from e


class SupabaseProfileStore:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.table_name = "profiles"

    def find_by_id(self, user_id: str) -> Optional[Profile]:
        result = _execute(
            self.supabase.table(self.table_name).select("*").eq("id", user_id).limit(1)
        )

        if result.data and len(result.data) > 0:
            return Profile.from_dict(result.data[0])
        return None

    def create(self, profile: Profile) -> Profile:
        result = _execute(
            self.supabase.table(self.table_name).insert(
                {k: v for k, v in profile.to_dict().items() if v is not None}
            ),
            conflict_message="Profile already exists",
        )

        if result.data and len(result.data) > 0:
            return Profile.from_dict(result.data[0])
        return profile


class SupabaseLabelStore:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.labels_table = "support_labels"
        self.links_table = "support_tickets_labels"

    def ping(self) -> None:
        """Cheap round trip used by the health check."""
        _execute(self.supabase.table(self.labels_table).select("id").limit(1))

    # Label catalog

    def list_labels(self) -> List[SupportLabel]:
        result = _execute(
            self.supabase.table(self.labels_table).select("*").order("name")
        )
        return [SupportLabel.from_dict(row) for row in (result.data or [])]

    def create_label(self, name: str, color: str) -> SupportLabel:
        result = _execute(
            self.supabase.table(self.labels_table).insert({"name": name, "color": color}),
            conflict_message="Label already exists",
        )
        if not result.data:
            raise StoreError("Failed to create label")
        return SupportLabel.from_dict(result.data[0])

    def delete_label(self, label_id: str) -> None:
        result = _execute(
            self.supabase.table(self.labels_table).delete().eq("id", label_id),
            missing_message="Label not found",
        )
        if not result.data:
            raise NotFoundError("Label not found")

    # Ticket associations

    def create_association(self, ticket_id: str, label_id: str) -> TicketLabel:
        result = _execute(
            self.supabase.table(self.links_table).insert({
                "ticket_id": ticket_id,
                "label_id": label_id,
            }),
            conflict_message="Label is already attached to this ticket",
            missing_message="Ticket or label not found",
        )
        if not result.data:
            raise StoreError("Failed to attach label")
        return TicketLabel.from_dict(result.data[0])

    def delete_association(self, ticket_id: str, label_id: str) -> None:
        result = _execute(
            self.supabase.table(self.links_table)
            .delete()
            .eq("ticket_id", ticket_id)
            .eq("label_id", label_id),
            missing_message="Label is not attached to this ticket",
        )
        if not result.data:
            raise NotFoundError("Label is not attached to this ticket")

    def list_associations(self, ticket_id: str) -> List[TicketLabel]:
        result = _execute(
            self.supabase.table(self.links_table)
            .select("ticket_id, label_id, label:support_labels(*)")
            .eq("ticket_id", ticket_id)
        )

        associations = []
        for row in (result.data or []):
            association = TicketLabel.of(row["ticket_id"], row["label_id"])
            association.label = SupportLabel.from_dict(row.get("label"))
            associations.append(association)
        return associations
