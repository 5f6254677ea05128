"""
hostgate.api.routers.admin

Admin office endpoint guarded by an OR rule.

Responsibilities:
- Admit callers from the AdminOffice IP policy, or any caller holding the Admin role.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from hostgate.auth.models import Principal
from hostgate.authz import rules
from hostgate.authz.deps import require_access

router = APIRouter(prefix="/adminoffice", tags=["Admin Office"])


@router.get("/status")
async def admin_status(
    principal: Principal | None = Depends(require_access(rules.ADMIN_OFFICE)),
) -> dict[str, str | None]:
    # principal is None when access was granted by origin alone.
    return {"status": "ok", "subject": principal.subject if principal else None}
