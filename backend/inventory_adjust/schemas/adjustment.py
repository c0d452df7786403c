from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


US_DATE_FORMATS = ("%m/%d/%Y", "%m/%d/%y")


class AdjustmentRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    reason_code: str = Field(alias="reasonCode")
    department: str
    subsidiary: str
    trandate: date
    item: str
    location: str
    adjust_qty_by: float = Field(alias="adjustQtyBy", allow_inf_nan=False)

    @field_validator("trandate", mode="before")
    @classmethod
    def parse_trandate(cls, value):
        if not isinstance(value, str):
            return value
        raw = value.strip()
        for fmt in US_DATE_FORMATS:
            try:
                return datetime.strptime(raw, fmt).date()
            except ValueError:
                continue
        if "T" in raw or " " in raw:
            try:
                return datetime.fromisoformat(raw.replace("Z", "+00:00")).date()
            except ValueError:
                pass
        return raw

    @field_validator("adjust_qty_by", mode="before")
    @classmethod
    def reject_boolean_quantity(cls, value):
        if isinstance(value, bool):
            raise ValueError("Input should be a number, not a boolean")
        return value


class AdjustmentResult(BaseModel):
    status: Literal["successful", "failed"]
    message: str

    @classmethod
    def successful(cls, record_id: str) -> "AdjustmentResult":
        return cls(status="successful", message=record_id)

    @classmethod
    def failed(cls, message: str) -> "AdjustmentResult":
        return cls(status="failed", message=message)
