from fastapi import APIRouter, Depends
from typing import Dict

import database
from context import AppContext, get_context

router = APIRouter(tags=["Inventory & Health"])

@router.get("/inventory", response_model=Dict[str, int])
async def get_inventory(ctx: AppContext = Depends(get_context)):
    return await ctx.inventory.aggregate_inventory()

@router.get("/health")
async def health_check(ctx: AppContext = Depends(get_context)):
    connected = await database.ping(ctx.db)
    return {"status": "OK", "database": "Connected" if connected else "Disconnected"}
