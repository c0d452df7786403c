from inventory_adjust.schemas.adjustment import AdjustmentRequest, AdjustmentResult

__all__ = [
    "AdjustmentRequest",
    "AdjustmentResult",
]
