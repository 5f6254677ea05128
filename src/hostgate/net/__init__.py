"""
hostgate.net

Network address helpers.

Responsibilities:
- Canonical address parsing/normalization (`addresses`).
- Process-wide same-host address discovery (`origin`).
"""

# Package marker.
