"""
hostgate.authz.rules

Endpoint access rules.

Responsibilities:
- Name the rules routers attach to endpoint groups.
- Name the built-in IP policies those rules reference.
"""

from __future__ import annotations

from hostgate.authz.engine import AccessRule, Requirement
from hostgate.settings import IpPolicySettings

SAME_HOST_POLICY = "SameHost"
PARTNER1_POLICY = "Partner1"
ADMIN_OFFICE_POLICY = "AdminOffice"

# Registered unless the operator configures a policy under the same name.
DEFAULT_IP_POLICIES: dict[str, IpPolicySettings] = {
    SAME_HOST_POLICY: IpPolicySettings(include_same_host=True),
}

PUBLIC = AccessRule(name="public")

AUTHENTICATED = AccessRule.all_of("authenticated", Requirement.identity())

SAME_HOST = AccessRule.all_of("same_host", Requirement.ip(SAME_HOST_POLICY))

PARTNER1 = AccessRule.all_of(
    "partner1",
    Requirement.identity("Partner1"),
    Requirement.token_origin(),
    Requirement.ip(PARTNER1_POLICY),
)

DATA_READER = AccessRule.all_of("data_reader", Requirement.identity("DataReader"))

DATA_WRITER = AccessRule.all_of(
    "data_writer",
    Requirement.identity("DataWriter"),
    Requirement.token_origin(),
)

ADMIN_OFFICE = AccessRule.any_of(
    "admin_office",
    Requirement.ip(ADMIN_OFFICE_POLICY),
    Requirement.identity("Admin"),
)


# --- Module Notes -----------------------------------------------------------
# Partner1/AdminOffice IP policies are expected to come from configuration; if they are
# missing, the ip requirement denies and logs `unknown_policy`.
