"""
Request authentication for the helpdesk API.

Reads the Supabase session credential from the request and runs it
through the AuthorizationGate registered on the application.

Credential sources, first match wins:
1. Authorization: Bearer <jwt> header
2. The configured session cookie (AUTH_COOKIE_NAME)
3. The Supabase SSR cookie sb-<ref>-auth-token, possibly split into
   .0/.1/... chunks and possibly a "base64-" prefixed JSON session

Usage:
    @require_admin
    def my_endpoint():
        user_id = g.user_id  # Verified admin user ID
        ...
"""

import base64
import binascii
import json
import logging
import re
from functools import wraps

from flask import current_app, g, request

from helpdesk.errors import UnauthorizedError
from helpdesk.utils.dependency_container import get_container

logger = logging.getLogger(__name__)

_SSR_COOKIE_PATTERN = re.compile(r"^sb-[A-Za-z0-9_-]+-auth-token(?:\.(\d+))?$")
_BASE64_PREFIX = "base64-"


def _decode_ssr_cookie(value: str) -> str | None:
    """Pull the access token out of a Supabase SSR session cookie value."""
    if value.startswith(_BASE64_PREFIX):
        encoded = value[len(_BASE64_PREFIX):]
        try:
            value = base64.urlsafe_b64decode(encoded + "=" * (-len(encoded) % 4)).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError):
            logger.debug("Undecodable base64 session cookie")
            return None

    if not value.startswith(("{", "[")):
        return value or None

    try:
        session = json.loads(value)
    except ValueError:
        logger.debug("Malformed JSON session cookie")
        return None

    if isinstance(session, dict):
        return session.get("access_token")
    if isinstance(session, list) and session:
        # Older helpers stored [access_token, refresh_token, ...]
        return session[0]
    return None


def _ssr_cookie_credential(cookies) -> str | None:
    whole = None
    chunks = {}
    for name, value in cookies.items():
        match = _SSR_COOKIE_PATTERN.match(name)
        if not match:
            continue
        if match.group(1) is None:
            whole = value
        else:
            chunks[int(match.group(1))] = value

    if whole is None and chunks:
        whole = "".join(chunks[i] for i in sorted(chunks))
    if not whole:
        return None
    return _decode_ssr_cookie(whole)


def extract_credential(req, cookie_name: str) -> str | None:
    """Return the raw session credential carried by the request, if any."""
    auth_header = req.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        token = auth_header[7:].strip()
        if token:
            return token

    token = req.cookies.get(cookie_name)
    if token:
        return token

    return _ssr_cookie_credential(req.cookies)


def current_credential() -> str | None:
    return extract_credential(request, current_app.config["AUTH_COOKIE_NAME"])


def current_session():
    """Resolve the session for the current request (None when signed out)."""
    auth_service = get_container().get_service("auth_service")
    return auth_service.get_session(current_credential())


def is_authorized(req=None) -> bool:
    """True iff the request carries a session whose profile has the admin role."""
    req = req if req is not None else request
    credential = extract_credential(req, current_app.config["AUTH_COOKIE_NAME"])
    gate = get_container().get_service("authorization_gate")
    return gate.is_authorized(credential)


def require_session(f):
    """
    Decorator that requires a signed-in user, admin or not.

    Sets g.user_id for downstream use.
    """
    @wraps(f)
    def decorated(*args, **kwargs):
        session = current_session()
        if not session:
            raise UnauthorizedError()

        g.user_id = session.user_id
        return f(*args, **kwargs)

    return decorated


def require_admin(f):
    """
    Decorator that admits only admins.

    Runs before any body or query parsing so that unauthenticated requests
    always receive 401, whatever else is wrong with them.
    Sets g.user_id for downstream use.
    """
    @wraps(f)
    def decorated(*args, **kwargs):
        gate = get_container().get_service("authorization_gate")
        session = gate.admin_session(current_credential())
        if not session:
            logger.info(f"Admin access denied: {request.method} {request.path}")
            raise UnauthorizedError()

        g.user_id = session.user_id
        return f(*args, **kwargs)

    return decorated
