from flask import request, current_app

from .errors import AuthError

def _get_admin_token() -> str:
    token = current_app.config.get("ADMIN_TOKEN") or ""
    return token.strip()

def require_admin() -> None:
    """
    Checks the Authorization header for the admin bearer token.
    Missing header -> 401, wrong token -> 403.
    """
    auth_header = request.headers.get("Authorization", "").strip()
    if not auth_header.lower().startswith("bearer "):
        raise AuthError("Authentication required")

    expected_token = _get_admin_token()
    provided_token = auth_header[7:].strip()
    if not expected_token or provided_token != expected_token:
        raise AuthError("Admin access required", code="FORBIDDEN", status=403)
