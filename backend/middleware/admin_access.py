"""
Admin access dependency.
Resolves the Authorization header through the Admin Gate before any admin
route body runs, so a rejected caller never reaches the store.
"""
from typing import Optional

from fastapi import Depends, Header

from context import AppContext, get_context
from models import AdminIdentity


async def require_admin(
    authorization: Optional[str] = Header(default=None),
    ctx: AppContext = Depends(get_context),
) -> AdminIdentity:
    return ctx.admin_gate.authorize(authorization)
