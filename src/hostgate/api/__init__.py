"""
hostgate.api

API package for the hostgate service.

Responsibilities:
- FastAPI app factory and router modules.
- Demo forecast payloads served behind the access rules.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The API layer stays thin: routers declare which `AccessRule` guards them and nothing more.
