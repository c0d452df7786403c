from fastapi import APIRouter

from inventory_adjust.api.routes import adjustments


api_router = APIRouter()
api_router.include_router(adjustments.router, prefix="/inventory/adjustments", tags=["Inventory Adjustments"])
