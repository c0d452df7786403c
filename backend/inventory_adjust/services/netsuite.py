from __future__ import annotations

import logging
from typing import Any

import httpx

from inventory_adjust.core.config import Settings
from inventory_adjust.core.errors import StoreUnavailableError, TransactionRejectedError
from inventory_adjust.services.store import AdjustmentHeader, AdjustmentLine, EntityCategory, ReasonCodeMatch


logger = logging.getLogger(__name__)

SUITEQL_PATH = "/services/rest/query/v1/suiteql"
RECORD_PATH = "/services/rest/record/v1"
INVENTORY_ADJUSTMENT = "inventoryAdjustment"

# item records expose their name as itemid in SuiteQL
CATEGORY_TABLES: dict[EntityCategory, tuple[str, str]] = {
    EntityCategory.DEPARTMENT: ("department", "name"),
    EntityCategory.SUBSIDIARY: ("subsidiary", "name"),
    EntityCategory.LOCATION: ("location", "name"),
    EntityCategory.ITEM: ("item", "itemid"),
}


class NetSuiteClient:
    def __init__(self, settings: Settings, transport: httpx.BaseTransport | None = None) -> None:
        headers = {"Accept": "application/json", "Content-Type": "application/json"}
        if settings.netsuite_access_token:
            headers["Authorization"] = f"Bearer {settings.netsuite_access_token}"
        self._client = httpx.Client(
            base_url=settings.netsuite_rest_url,
            headers=headers,
            timeout=settings.netsuite_timeout_seconds,
            transport=transport,
        )

    def __enter__(self) -> "NetSuiteClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def suiteql(self, query: str, limit: int = 1) -> list[dict[str, Any]]:
        try:
            response = self._client.post(
                SUITEQL_PATH,
                params={"limit": limit},
                headers={"Prefer": "transient"},
                json={"q": query},
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise StoreUnavailableError(f"SuiteQL query failed: {_error_detail(exc.response)}") from exc
        except httpx.HTTPError as exc:
            raise StoreUnavailableError(f"SuiteQL query failed: {exc}") from exc
        return response.json().get("items", [])

    def create_record(self, record_type: str, body: dict[str, Any]) -> str:
        try:
            response = self._client.post(f"{RECORD_PATH}/{record_type}", json=body)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise TransactionRejectedError(_error_detail(exc.response)) from exc
        except httpx.HTTPError as exc:
            raise TransactionRejectedError(f"Could not reach NetSuite: {exc}") from exc

        location = response.headers.get("Location", "")
        record_id = location.rstrip("/").rsplit("/", 1)[-1] if location else ""
        if not record_id:
            raise TransactionRejectedError(f"NetSuite did not return a {record_type} id")
        return record_id


class NetSuiteEntityLookup:
    def __init__(self, client: NetSuiteClient, settings: Settings) -> None:
        self.client = client
        self.reason_code_record = settings.netsuite_reason_code_record
        self.reason_code_account_field = settings.netsuite_reason_code_account_field

    def find_id_by_name(self, category: EntityCategory, name: str) -> str | None:
        table, name_column = CATEGORY_TABLES[EntityCategory(category)]
        rows = self.client.suiteql(
            f"SELECT id FROM {table} "
            f"WHERE {name_column} = {quote_literal(name)} AND isinactive = 'F' "
            "ORDER BY id"
        )
        if not rows:
            return None
        return str(rows[0]["id"])

    def find_reason_code(self, name: str) -> ReasonCodeMatch | None:
        account_field = self.reason_code_account_field
        rows = self.client.suiteql(
            f"SELECT id, {account_field} FROM {self.reason_code_record} "
            f"WHERE name = {quote_literal(name)} AND isinactive = 'F' "
            "ORDER BY id"
        )
        if not rows:
            return None
        account = rows[0].get(account_field)
        return ReasonCodeMatch(id=str(rows[0]["id"]), account_id=str(account) if account else None)


class NetSuiteTransactionWriter:
    def __init__(self, client: NetSuiteClient, settings: Settings) -> None:
        self.client = client
        self.reason_code_field = settings.netsuite_reason_code_body_field

    def create(self, header: AdjustmentHeader, lines: list[AdjustmentLine]) -> str:
        body = build_adjustment_body(header, lines, self.reason_code_field)
        record_id = self.client.create_record(INVENTORY_ADJUSTMENT, body)
        logger.debug("NetSuite created %s %s", INVENTORY_ADJUSTMENT, record_id)
        return record_id


def build_adjustment_body(
    header: AdjustmentHeader,
    lines: list[AdjustmentLine],
    reason_code_field: str,
) -> dict[str, Any]:
    body: dict[str, Any] = {
        "subsidiary": {"id": header.subsidiary_id},
        "account": {"id": header.account_id},
        "tranDate": header.trandate.isoformat(),
        "inventory": {"items": [_line_body(line) for line in lines]},
    }
    if header.reason_code_id:
        body[reason_code_field] = {"id": header.reason_code_id}
    if header.memo:
        body["memo"] = header.memo
    return body


def _line_body(line: AdjustmentLine) -> dict[str, Any]:
    item: dict[str, Any] = {
        "item": {"id": line.item_id},
        "location": {"id": line.location_id},
        "adjustQtyBy": line.adjust_qty_by,
    }
    if line.department_id:
        item["department"] = {"id": line.department_id}
    return item


def quote_literal(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


def _error_detail(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return f"NetSuite responded {response.status_code}: {response.text}".strip()

    if not isinstance(payload, dict):
        return f"NetSuite responded {response.status_code}"
    details = payload.get("o:errorDetails") or []
    if details and details[0].get("detail"):
        return details[0]["detail"]
    return payload.get("title") or f"NetSuite responded {response.status_code}"
