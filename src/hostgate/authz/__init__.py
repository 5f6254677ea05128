"""
hostgate.authz

Authorization decision engine.

Responsibilities:
- Named IP policies (`policies`).
- Single-signal evaluators for origin and identity (`evaluators`).
- AND/OR composition with unauthenticated/forbidden classification (`engine`).
- Endpoint access rules and the FastAPI enforcement dependency (`rules`, `deps`).
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Nothing in this package performs I/O per request; all inputs are in-memory snapshots.
