from fastapi import APIRouter, Depends, Request
from typing import List

from context import AppContext, get_context
from models import BloodRequest, BloodRequestCreate, RequestSubmitted, AdminIdentity, AuditModule
from middleware import require_admin
from services import NotFoundError

router = APIRouter(prefix="/requests", tags=["Blood Requests"])

@router.post("", status_code=201, response_model=RequestSubmitted)
async def create_blood_request(request_data: BloodRequestCreate, ctx: AppContext = Depends(get_context)):
    result = await ctx.intake.submit(request_data)
    return RequestSubmitted(matching_donors=result.matching_donors)

@router.get("", response_model=List[BloodRequest])
async def get_blood_requests(ctx: AppContext = Depends(get_context)):
    return await ctx.requests.list()

@router.delete("/{request_id}")
async def delete_blood_request(
    request_id: str,
    request: Request,
    admin: AdminIdentity = Depends(require_admin),
    ctx: AppContext = Depends(get_context)
):
    blood_request = await ctx.requests.delete(request_id)
    await ctx.audit.log_delete(
        AuditModule.REQUESTS, request_id, "blood_request",
        old_values=blood_request.model_dump(mode="json"), request=request
    )
    return {"message": "Request deleted"}

@router.patch("/{request_id}/approve", response_model=BloodRequest)
async def approve_request(
    request_id: str,
    request: Request,
    admin: AdminIdentity = Depends(require_admin),
    ctx: AppContext = Depends(get_context)
):
    existing = await ctx.requests.get(request_id)
    if not existing:
        raise NotFoundError("Request not found")

    updated = await ctx.requests.approve(request_id)
    await ctx.audit.log_approve(request_id, existing.status.value, request=request)
    return updated
