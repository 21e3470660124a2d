"""
Support Label API Routes.

Label catalog:
- GET /api/support/labels - List labels ordered by name
- POST /api/support/labels - Create a label
- DELETE /api/support/labels?id=<label_id> - Delete a label

Ticket labels:
- GET /api/support/labels/<ticket_id> - List the labels on a ticket
- POST /api/support/labels/<ticket_id> - Attach a label to a ticket
- DELETE /api/support/labels/<ticket_id>?labelId=<label_id> - Detach a label

Every endpoint is admin only. The admin check runs before the request body
or query string is looked at. Errors are returned as {"error": "..."}.
"""

from flask import request, jsonify
import logging

from helpdesk.middleware.auth import require_admin
from helpdesk.support import support_bp
from helpdesk.utils.dependency_container import get_container

logger = logging.getLogger(__name__)


def _label_service():
    return get_container().get_service('label_service')


def _json_body() -> dict:
    """Request JSON object; anything else (absent, malformed, not an object) reads as empty."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


# =============================================================================
# Label Catalog Endpoints
# =============================================================================

@support_bp.route('/labels', methods=['GET'])
@require_admin
def list_labels():
    labels = _label_service().list_labels()
    return jsonify([label.to_dict() for label in labels])


@support_bp.route('/labels', methods=['POST'])
@require_admin
def create_label():
    """
    Create a support label.

    Body:
        - name: Label name, unique (required)
        - color: Display color, e.g. "#ef4444" (required)
    """
    data = _json_body()
    label = _label_service().create_label(data.get('name'), data.get('color'))
    return jsonify(label.to_dict()), 201


@support_bp.route('/labels', methods=['DELETE'])
@require_admin
def delete_label():
    """
    Delete a support label and its ticket associations.

    Query params:
        - id: Label ID (required)
    """
    _label_service().delete_label(request.args.get('id'))
    return jsonify({"success": True}), 200


# =============================================================================
# Ticket Label Endpoints
# =============================================================================

@support_bp.route('/labels/<ticket_id>', methods=['GET'])
@require_admin
def list_ticket_labels(ticket_id):
    associations = _label_service().list_ticket_labels(ticket_id)
    return jsonify([association.to_response() for association in associations])


@support_bp.route('/labels/<ticket_id>', methods=['POST'])
@require_admin
def attach_label(ticket_id):
    """
    Attach an existing label to a ticket.

    Body:
        - labelId: Label ID (required)

    Returns 201 with the created association, 409 if the label is already
    attached, 404 if the ticket or label does not exist.
    """
    data = _json_body()
    association = _label_service().associate(ticket_id, data.get('labelId'))
    return jsonify(association.to_dict()), 201


@support_bp.route('/labels/<ticket_id>', methods=['DELETE'])
@require_admin
def detach_label(ticket_id):
    """
    Detach a label from a ticket.

    Query params:
        - labelId: Label ID (required)

    Returns 404 if the label is not attached to the ticket.
    """
    _label_service().disassociate(ticket_id, request.args.get('labelId'))
    return jsonify({"success": True}), 200
