from fastapi import APIRouter, Depends, Request
from typing import List

from context import AppContext, get_context
from models import Donor, DonorCreate, DonorRegistered, AdminIdentity, AuditModule
from middleware import require_admin

router = APIRouter(prefix="/donors", tags=["Donors"])

@router.post("", status_code=201, response_model=DonorRegistered)
async def register_donor(donor_data: DonorCreate, ctx: AppContext = Depends(get_context)):
    donor = await ctx.donors.create(donor_data)
    return DonorRegistered(donor=donor)

@router.get("", response_model=List[Donor])
async def get_donors(ctx: AppContext = Depends(get_context)):
    return await ctx.donors.list()

@router.delete("/{donor_id}")
async def delete_donor(
    donor_id: str,
    request: Request,
    admin: AdminIdentity = Depends(require_admin),
    ctx: AppContext = Depends(get_context)
):
    donor = await ctx.donors.delete(donor_id)
    await ctx.audit.log_delete(
        AuditModule.DONORS, donor_id, "donor",
        old_values=donor.model_dump(mode="json"), request=request
    )
    return {"message": "Donor deleted"}
