"""Mock technical indicator snapshots used by ``analyzeTechnicals``."""

from __future__ import annotations

import copy
from typing import Any


def _snapshot(
    symbol: str,
    price: tuple[float, float, float],
    trends: tuple[str, str, list[float], list[float]],
    rsi: float,
    macd: tuple[float, float, float, str],
    bollinger: tuple[float, float, float, float, str],
    moving_averages: tuple[float, float, float, float, str],
    patterns: tuple[list[str], list[str]],
    volume: tuple[int, int, str],
    recommendation: tuple[str, str, str],
) -> dict[str, Any]:
    current, change, percent_change = price
    primary, secondary, support, resistance = trends
    return {
        "symbol": symbol,
        "price": {
            "current": current,
            "change": change,
            "percent_change": percent_change,
        },
        "trends": {
            "primary": primary,
            "secondary": secondary,
            "support": support,
            "resistance": resistance,
        },
        "indicators": {
            "rsi": {"value": rsi, "signal": "neutral"},
            "macd": dict(zip(("value", "signal", "histogram", "trend"), macd)),
            "bollinger_bands": dict(
                zip(("upper", "middle", "lower", "width", "signal"), bollinger)
            ),
            "moving_averages": dict(
                zip(("ma20", "ma50", "ma100", "ma200", "signal"), moving_averages)
            ),
        },
        "patterns": {"candlestick": patterns[0], "chart": patterns[1]},
        "volume": dict(zip(("current", "average", "trend"), volume)),
        "recommendation": dict(zip(("action", "timeframe", "reasoning"), recommendation)),
    }


TECHNICALS: dict[str, dict[str, Any]] = {
    "RELIANCE": _snapshot(
        "RELIANCE",
        price=(2650, 25.5, 0.97),
        trends=("bullish", "bullish", [2580, 2520, 2450], [2680, 2750, 2820]),
        rsi=62,
        macd=(15.2, 10.5, 4.7, "bullish"),
        bollinger=(2720, 2600, 2480, 9.2, "neutral"),
        moving_averages=(2620, 2550, 2480, 2400, "bullish"),
        patterns=(
            ["Bullish Engulfing", "Three White Soldiers"],
            ["Ascending Triangle", "Cup and Handle"],
        ),
        volume=(5_000_000, 4_200_000, "increasing"),
        recommendation=(
            "buy",
            "medium",
            "Strong uptrend with increasing volume and positive technical indicators. "
            "Price is above all major moving averages with bullish MACD crossover.",
        ),
    ),
    "INFY": _snapshot(
        "INFY",
        price=(1600, 22.5, 1.43),
        trends=("bullish", "neutral", [1550, 1520, 1480], [1620, 1650, 1680]),
        rsi=65,
        macd=(12.5, 8.2, 4.3, "bullish"),
        bollinger=(1640, 1580, 1520, 7.6, "neutral"),
        moving_averages=(1580, 1550, 1520, 1450, "bullish"),
        patterns=(["Morning Star", "Hammer"], ["Double Bottom", "Breakout"]),
        volume=(3_000_000, 2_800_000, "increasing"),
        recommendation=(
            "buy",
            "medium",
            "Stock is in an uptrend with positive momentum. All moving averages are "
            "aligned bullishly and volume is increasing on up days.",
        ),
    ),
    "HDFCBANK": _snapshot(
        "HDFCBANK",
        price=(1550, -8.5, -0.55),
        trends=("neutral", "bearish", [1520, 1500, 1480], [1580, 1600, 1620]),
        rsi=45,
        macd=(-2.5, -1.8, -0.7, "neutral"),
        bollinger=(1600, 1560, 1520, 5.1, "squeeze"),
        moving_averages=(1560, 1520, 1500, 1480, "neutral"),
        patterns=(["Doji", "Spinning Top"], ["Rectangle", "Consolidation"]),
        volume=(4_000_000, 4_200_000, "stable"),
        recommendation=(
            "hold",
            "medium",
            "Stock is consolidating in a range with neutral indicators. Wait for a "
            "clear breakout direction before taking new positions.",
        ),
    ),
    "SUNPHARMA": _snapshot(
        "SUNPHARMA",
        price=(1050, -12.5, -1.18),
        trends=("bearish", "bearish", [1020, 1000, 980], [1080, 1100, 1120]),
        rsi=38,
        macd=(-8.5, -5.2, -3.3, "bearish"),
        bollinger=(1100, 1070, 1040, 5.6, "neutral"),
        moving_averages=(1070, 1080, 1060, 1020, "bearish"),
        patterns=(
            ["Bearish Engulfing", "Evening Star"],
            ["Head and Shoulders", "Descending Triangle"],
        ),
        volume=(1_500_000, 1_300_000, "increasing"),
        recommendation=(
            "sell",
            "short",
            "Stock is in a downtrend with bearish indicators. Price is below key "
            "moving averages with increasing volume on down days.",
        ),
    ),
}


def get_technicals(symbol: str) -> dict[str, Any]:
    snapshot = TECHNICALS.get(symbol)
    if snapshot is not None:
        return copy.deepcopy(snapshot)
    return _snapshot(
        symbol,
        price=(1000, 0, 0),
        trends=("neutral", "neutral", [950, 900], [1050, 1100]),
        rsi=50,
        macd=(0, 0, 0, "neutral"),
        bollinger=(1050, 1000, 950, 10, "neutral"),
        moving_averages=(1000, 1000, 1000, 1000, "neutral"),
        patterns=([], []),
        volume=(1_000_000, 1_000_000, "stable"),
        recommendation=("hold", "medium", "Insufficient data for a strong recommendation."),
    )
