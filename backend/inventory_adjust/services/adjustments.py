"""Inventory adjustment request flow.

A request names its reason code, department, subsidiary, location and item.
Each name is resolved to an internal id through an ``EntityLookup`` before a
single adjustment with one inventory line is handed to a ``TransactionWriter``.
Every failure is reported as a ``failed`` result; nothing is raised to the
caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any

from pydantic import ValidationError

from inventory_adjust.core.errors import AdjustmentError, InvalidRequestError, NotFoundError
from inventory_adjust.schemas.adjustment import AdjustmentRequest, AdjustmentResult
from inventory_adjust.services.store import (
    AdjustmentHeader,
    AdjustmentLine,
    EntityCategory,
    EntityLookup,
    ReasonCodeMatch,
    TransactionWriter,
)


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedIdentifiers:
    reason_code_id: str
    account_id: str
    department_id: str
    subsidiary_id: str
    location_id: str
    item_id: str


def resolve_reason_code(lookup: EntityLookup, name: str) -> ReasonCodeMatch:
    match = lookup.find_reason_code(name)
    if match is None:
        raise NotFoundError("reason code", name)
    if not match.account_id:
        raise NotFoundError("account for reason code", name)
    return match


def resolve_id_from_name(lookup: EntityLookup, category: EntityCategory, name: str) -> str:
    entity_id = lookup.find_id_by_name(category, name)
    if entity_id is None:
        raise NotFoundError(category.value, name)
    return entity_id


def resolve_identifiers(lookup: EntityLookup, request: AdjustmentRequest) -> ResolvedIdentifiers:
    reason_code = resolve_reason_code(lookup, request.reason_code)
    department_id = resolve_id_from_name(lookup, EntityCategory.DEPARTMENT, request.department)
    subsidiary_id = resolve_id_from_name(lookup, EntityCategory.SUBSIDIARY, request.subsidiary)
    location_id = resolve_id_from_name(lookup, EntityCategory.LOCATION, request.location)
    item_id = resolve_id_from_name(lookup, EntityCategory.ITEM, request.item)
    return ResolvedIdentifiers(
        reason_code_id=reason_code.id,
        account_id=reason_code.account_id,
        department_id=department_id,
        subsidiary_id=subsidiary_id,
        location_id=location_id,
        item_id=item_id,
    )


def create_adjustment(
    writer: TransactionWriter,
    resolved: ResolvedIdentifiers,
    trandate: date,
    quantity_delta: float,
) -> str:
    header = AdjustmentHeader(
        subsidiary_id=resolved.subsidiary_id,
        account_id=resolved.account_id,
        trandate=trandate,
        reason_code_id=resolved.reason_code_id,
    )
    line = AdjustmentLine(
        item_id=resolved.item_id,
        location_id=resolved.location_id,
        adjust_qty_by=quantity_delta,
        department_id=resolved.department_id,
    )
    return writer.create(header, [line])


def parse_request(payload: Any) -> AdjustmentRequest:
    if not isinstance(payload, dict):
        raise InvalidRequestError("Request body must be a JSON object")
    try:
        return AdjustmentRequest.model_validate(payload)
    except ValidationError as exc:
        problems = []
        for error in exc.errors():
            field = ".".join(str(part) for part in error["loc"]) or "body"
            problems.append(f"{field}: {error['msg']}")
        raise InvalidRequestError("; ".join(problems)) from exc


def process_adjustment(payload: Any, lookup: EntityLookup, writer: TransactionWriter) -> AdjustmentResult:
    try:
        request = parse_request(payload)
        resolved = resolve_identifiers(lookup, request)
        record_id = create_adjustment(writer, resolved, request.trandate, request.adjust_qty_by)
    except AdjustmentError as exc:
        logger.warning("%s: %s", exc.title, exc.message)
        return AdjustmentResult.failed(exc.message)
    except Exception as exc:
        logger.exception("Unexpected error while creating inventory adjustment")
        return AdjustmentResult.failed(str(exc) or exc.__class__.__name__)

    return AdjustmentResult.successful(record_id)
