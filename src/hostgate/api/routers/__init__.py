"""
hostgate.api.routers

HTTP routers, one module per endpoint family.
"""

# Package marker.
