from __future__ import annotations

import re
from dataclasses import dataclass

_ADDITIVE_RE = re.compile(r"^\+\s*(\d+(?:\.\d+)?)(?:\s*~\s*(\d+(?:\.\d+)?))?$")


@dataclass(frozen=True)
class PriceQuote:
    amount: int | float  # counted in totals
    amount_max: int | float | None = None  # upper bound of an additive range
    additive: bool = False


def _to_number(text: str) -> int | float:
    value = float(text)
    return int(value) if value.is_integer() else value


def parse_price(price: int | float | str) -> PriceQuote:
    """
    Parse a catalog price.

    Plain numbers are used as-is. Additive modifiers look like "+5" or "+5~15";
    a range counts its lower bound towards totals and keeps the upper bound
    for display.
    """
    if isinstance(price, bool):
        raise ValueError(f"Invalid price: {price!r}")
    if isinstance(price, (int, float)):
        if price < 0:
            raise ValueError(f"Negative price: {price!r}")
        return PriceQuote(amount=price)

    text = price.strip()
    match = _ADDITIVE_RE.match(text)
    if match:
        low = _to_number(match.group(1))
        high = _to_number(match.group(2)) if match.group(2) else None
        if high is not None and high < low:
            raise ValueError(f"Invalid price range: {price!r}")
        return PriceQuote(amount=low, amount_max=high, additive=True)

    try:
        amount = _to_number(text)
    except ValueError:
        raise ValueError(f"Invalid price: {price!r}") from None
    if amount < 0:
        raise ValueError(f"Negative price: {price!r}")
    return PriceQuote(amount=amount)


def format_price(price: int | float | str) -> str:
    quote = parse_price(price)
    prefix = "+" if quote.additive else ""
    if quote.amount_max is not None:
        return f"{prefix}${quote.amount}~{quote.amount_max}"
    return f"{prefix}${quote.amount}"
