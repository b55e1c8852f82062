from fastapi import APIRouter, Depends, Request

from context import AppContext, get_context
from models import AdminLogin, TokenResponse
from services import AuthError

router = APIRouter(prefix="/admin", tags=["Admin"])

@router.post("/login", response_model=TokenResponse)
async def admin_login(credentials: AdminLogin, request: Request, ctx: AppContext = Depends(get_context)):
    try:
        token = ctx.admin_gate.login(credentials.password)
    except AuthError:
        await ctx.audit.log_auth(False, request=request)
        raise
    await ctx.audit.log_auth(True, request=request)
    return TokenResponse(token=token)
