import json
from typing import Any

from fastapi import APIRouter, Depends, Request

from inventory_adjust.api.deps import get_entity_lookup, get_transaction_writer
from inventory_adjust.schemas.adjustment import AdjustmentResult
from inventory_adjust.services.adjustments import process_adjustment
from inventory_adjust.services.store import EntityLookup, TransactionWriter


router = APIRouter()


async def read_body(request: Request) -> Any:
    raw = await request.body()
    if not raw.strip():
        return None
    try:
        return json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError):
        return raw.decode("utf-8", errors="replace")


@router.post("", response_model=AdjustmentResult)
def create_inventory_adjustment(
    payload: Any = Depends(read_body),
    lookup: EntityLookup = Depends(get_entity_lookup),
    writer: TransactionWriter = Depends(get_transaction_writer),
) -> AdjustmentResult:
    return process_adjustment(payload, lookup, writer)
