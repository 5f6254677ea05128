"""
hostgate.auth

Authentication package.

Responsibilities:
- Opaque bearer token validation and principal resolution.
- FastAPI dependency that turns the Authorization header into a `CredentialResult`.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# This package only resolves identity; allow/deny decisions live in `hostgate.authz`.
