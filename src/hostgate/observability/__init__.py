"""
hostgate.observability

Observability package.

Responsibilities:
- Structured logging configuration.
- Request context propagation (request id, client address) for log enrichment.
"""

# Package marker.
