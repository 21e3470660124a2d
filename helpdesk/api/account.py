from flask import Blueprint, g, jsonify
import logging

from helpdesk.middleware.auth import require_session
from helpdesk.utils.dependency_container import get_container

account_bp = Blueprint('account', __name__)
logger = logging.getLogger(__name__)


@account_bp.route('/is_admin', methods=['GET'])
@require_session
def is_admin():
    """Report whether the signed-in user is an admin, creating their profile on first visit."""
    profile_service = get_container().get_service('profile_service')
    return jsonify(profile_service.is_admin(g.user_id)), 200
