"""
Support Label Module.

Admin-only management of support ticket labels:
- Label catalog (list, create, delete)
- Attaching and detaching labels on individual tickets
"""

from flask import Blueprint

support_bp = Blueprint('support', __name__)

from helpdesk.support import routes
