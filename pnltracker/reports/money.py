from __future__ import annotations

from decimal import Decimal, InvalidOperation

import structlog

log = structlog.get_logger(__name__)

ZERO = Decimal("0")

def to_decimal(value) -> Decimal:
    """Coerce a raw amount to a finite Decimal; anything unparseable becomes zero."""
    if value is None:
        return ZERO
    if isinstance(value, bool):
        log.warning("amount_coerced", raw=repr(value))
        return ZERO
    if isinstance(value, Decimal):
        d = value
    elif isinstance(value, int):
        return Decimal(value)
    else:
        s = str(value).strip().replace("\u00a0", "").replace(" ", "").replace(",", ".")
        if s == "":
            return ZERO
        try:
            d = Decimal(s)
        except (InvalidOperation, ValueError):
            log.warning("amount_coerced", raw=repr(value))
            return ZERO
    if not d.is_finite():
        log.warning("amount_coerced", raw=repr(value))
        return ZERO
    return d

def percent(part: Decimal, whole: Decimal) -> Decimal:
    if whole == 0:
        return ZERO
    return part / whole * 100

def margin_percent(profit: Decimal, income: Decimal) -> Decimal:
    """Profit as % of income; zero unless income is positive."""
    if income <= 0:
        return ZERO
    return profit / income * 100
