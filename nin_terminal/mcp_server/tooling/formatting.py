"""Text formatting helpers shared by the tool report renderers."""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from typing import Any

CRORE = 10_000_000
LAKH = 100_000

_EXCHANGE_PREFIX_RE = re.compile(r"^[A-Z]+_")

_TREND_LABELS = {
    "increasing": "▲ Improving",
    "improving": "▲ Improving",
    "decreasing": "▼ Declining",
    "deteriorating": "▼ Declining",
    "stable": "◆ Stable",
}


def format_number(value: float | int, decimals: int = 2) -> str:
    return f"{value:,.{decimals}f}"


def format_currency(value: float | int, decimals: int = 2) -> str:
    """``1234.5`` -> ``₹1,234.50``. Negative values keep their sign in front."""
    sign = "-" if value < 0 else ""
    return f"{sign}₹{format_number(abs(value), decimals)}"


def _group_indian(value: int) -> str:
    """``12345678`` -> ``1,23,45,678``."""
    digits = str(value)
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs + [tail])


def format_large_number(value: float | int) -> str:
    """Express ``value`` in crore or lakh, falling back to Indian digit grouping."""
    sign = "-" if value < 0 else ""
    magnitude = abs(value)
    if magnitude >= CRORE:
        return f"{sign}{magnitude / CRORE:,.2f} Cr"
    if magnitude >= LAKH:
        return f"{sign}{magnitude / LAKH:.2f} L"
    if float(magnitude).is_integer():
        return f"{sign}{_group_indian(int(magnitude))}"
    whole, fraction = f"{magnitude:.2f}".split(".")
    return f"{sign}{_group_indian(int(whole))}.{fraction}"


def format_percentage(ratio: float) -> str:
    """Signed percentage of a ratio: ``0.153`` -> ``+15.30%``."""
    return f"{'+' if ratio >= 0 else ''}{ratio * 100:.2f}%"


def format_trend(trend: str) -> str:
    return _TREND_LABELS.get(trend, trend)


def comparison_icon(
    value: float, benchmark: float, higher_is_better: bool = False
) -> str:
    if benchmark and abs(value - benchmark) / abs(benchmark) < 0.05:
        return "◆ In line"
    if value == benchmark:
        return "◆ In line"
    is_better = value > benchmark if higher_is_better else value < benchmark
    return "✓ Better" if is_better else "✗ Worse"


def capitalize(text: str) -> str:
    return text[:1].upper() + text[1:]


def strip_exchange_prefix(symbol: str) -> str:
    """``NSE_RELIANCE`` -> ``RELIANCE``."""
    return _EXCHANGE_PREFIX_RE.sub("", symbol)


def markdown_table(headers: Sequence[str], rows: Iterable[Sequence[Any]]) -> str:
    lines = [
        "| " + " | ".join(headers) + " |",
        "|" + "|".join("-" * (len(h) + 2) for h in headers) + "|",
    ]
    for row in rows:
        lines.append("| " + " | ".join(str(cell) for cell in row) + " |")
    return "\n".join(lines) + "\n"


def bullet_list(items: Iterable[str]) -> str:
    return "".join(f"- {item}\n" for item in items)
