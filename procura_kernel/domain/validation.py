"""
Caller-side validation helpers.

Pure checks with no I/O. The calculation engines assume pre-validated
input; form handlers and import jobs run these before invoking them.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from procura_kernel.domain.currency import Currency
from procura_kernel.domain.values import ZERO, to_decimal
from procura_kernel.exceptions import OrderDraftInvalidError
from procura_kernel.logging_config import get_logger

logger = get_logger("kernel.validation")

_RIF_PATTERN = re.compile(r"^[JVGEP]\d{8,9}$")
_RIF_STRIP = re.compile(r"[- ]")


def validate_rif(rif: str | None) -> str | None:
    """
    Normalize and validate a Venezuelan RIF.

    Hyphens and spaces are removed and letters uppercased. Accepted form is
    one of J, V, G, E, P followed by 8 or 9 digits (e.g. ``J123456789``).

    Returns:
        The normalized RIF, or None if it is empty or malformed.
    """
    if not rif:
        return None
    normalized = _RIF_STRIP.sub("", rif).upper()
    if _RIF_PATTERN.match(normalized):
        return normalized
    return None


@dataclass(frozen=True)
class DraftIssue:
    """One problem found in a draft order. ``index`` is None for order-level issues."""

    index: int | None
    field: str
    message: str


def _field(item: Any, name: str) -> Any:
    if isinstance(item, Mapping):
        return item.get(name)
    return getattr(item, name, None)


def check_order_draft(
    items: Iterable[Any],
    currency: str | Currency,
    exchange_rate: Decimal | float | str | None = None,
) -> tuple[DraftIssue, ...]:
    """
    Pre-submit checks for a purchase order draft.

    Each item must reference a material (id and name) and have a positive
    quantity and unit price. Orders in VES need a positive exchange rate.
    An empty draft is reported as an order-level issue.
    """
    issues: list[DraftIssue] = []
    currency = Currency.parse(currency)

    if currency == Currency.VES and to_decimal(exchange_rate) <= ZERO:
        issues.append(
            DraftIssue(
                None,
                "exchange_rate",
                "La tasa de cambio es requerida y debe ser mayor que cero "
                "para órdenes en Bolívares.",
            )
        )

    count = 0
    for index, item in enumerate(items):
        count += 1
        if not _field(item, "material_id") or not _field(item, "material_name"):
            issues.append(DraftIssue(index, "material", "Material no seleccionado."))
        if to_decimal(_field(item, "quantity")) <= ZERO:
            issues.append(
                DraftIssue(index, "quantity", "La cantidad debe ser mayor que cero.")
            )
        if to_decimal(_field(item, "unit_price")) <= ZERO:
            issues.append(
                DraftIssue(
                    index, "unit_price", "El precio unitario debe ser mayor que cero."
                )
            )

    if count == 0:
        issues.append(
            DraftIssue(None, "items", "La orden debe tener al menos un ítem.")
        )

    if issues:
        logger.debug("order_draft_issues_found", extra={
            "issue_count": len(issues),
            "item_count": count,
            "currency": currency.value,
        })
    return tuple(issues)


def require_valid_order_draft(
    items: Iterable[Any],
    currency: str | Currency,
    exchange_rate: Decimal | float | str | None = None,
) -> None:
    """
    Raise if the draft fails ``check_order_draft``.

    Raises:
        OrderDraftInvalidError: carrying every issue found.
    """
    issues = check_order_draft(items, currency, exchange_rate)
    if issues:
        logger.warning("order_draft_rejected", extra={
            "issue_count": len(issues),
            "fields": sorted({issue.field for issue in issues}),
        })
        raise OrderDraftInvalidError(issues)
