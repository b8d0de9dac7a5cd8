"""Mock options analytics used by ``analyzeOptions``.

Strategy payoffs use the string ``"unlimited"`` where a bound does not
exist. A ``risk_reward_ratio`` of 0 marks a strategy without a profit cap.
"""

from __future__ import annotations

import copy
from typing import Any

_DEC_EXPIRY = "2023-12-15"


def _leg(action: str, option_type: str, strike: float, expiration: str = _DEC_EXPIRY) -> dict[str, Any]:
    return {"action": action, "type": option_type, "strike": strike, "expiration": expiration}


OPTIONS: dict[str, dict[str, Any]] = {
    "RELIANCE": {
        "symbol": "RELIANCE",
        "current_price": 2650,
        "volatility": {"historical": 0.22, "implied": 0.25, "skew": "normal", "term": "contango"},
        "sentiment": {
            "put_call_ratio": 0.85,
            "interpretation": "Slightly bullish sentiment with moderate call buying activity",
        },
        "strategies": [
            {
                "name": "Bull Call Spread",
                "description": "Buy a call option and sell a higher strike call option with the same expiration",
                "contracts": [_leg("buy", "call", 2700), _leg("sell", "call", 2800)],
                "max_profit": 5000,
                "max_loss": 3000,
                "breakeven": [2730],
                "risk_reward_ratio": 0.6,
            },
            {
                "name": "Cash-Secured Put",
                "description": "Sell a put option with cash set aside to buy shares if assigned",
                "contracts": [_leg("sell", "put", 2600)],
                "max_profit": 4500,
                "max_loss": 255500,
                "breakeven": [2555],
                "risk_reward_ratio": 56.78,
            },
            {
                "name": "Iron Condor",
                "description": "Sell a put spread and a call spread to profit from low volatility",
                "contracts": [
                    _leg("buy", "put", 2500),
                    _leg("sell", "put", 2550),
                    _leg("sell", "call", 2750),
                    _leg("buy", "call", 2800),
                ],
                "max_profit": 2500,
                "max_loss": 2500,
                "breakeven": [2525, 2775],
                "risk_reward_ratio": 1.0,
            },
        ],
        "unusual_activity": [
            {
                "contract": {
                    "symbol": "RELIANCE23DEC2700CE",
                    "underlying_symbol": "RELIANCE",
                    "type": "call",
                    "strike": 2700,
                    "expiration": _DEC_EXPIRY,
                    "bid": 45.5,
                    "ask": 46.5,
                    "last_price": 46.0,
                    "volume": 3500,
                    "open_interest": 1200,
                    "implied_volatility": 0.28,
                    "delta": 0.45,
                    "gamma": 0.002,
                    "theta": -0.35,
                    "vega": 0.15,
                    "rho": 0.05,
                },
                "volume": 3500,
                "open_interest_ratio": 2.92,
                "description": "Unusual call buying activity at 2700 strike, suggesting bullish sentiment",
            }
        ],
    },
    "INFY": {
        "symbol": "INFY",
        "current_price": 1600,
        "volatility": {"historical": 0.25, "implied": 0.28, "skew": "normal", "term": "flat"},
        "sentiment": {
            "put_call_ratio": 0.95,
            "interpretation": "Neutral sentiment with balanced put and call activity",
        },
        "strategies": [
            {
                "name": "Covered Call",
                "description": "Own the stock and sell a call option against it",
                "contracts": [_leg("sell", "call", 1650)],
                "max_profit": 7500,
                "max_loss": 152500,
                "breakeven": [1525],
                "risk_reward_ratio": 20.33,
            },
            {
                "name": "Protective Put",
                "description": "Own the stock and buy a put option to protect downside",
                "contracts": [_leg("buy", "put", 1550)],
                "max_profit": "unlimited",
                "max_loss": 8000,
                "breakeven": [1630],
                "risk_reward_ratio": 0,
            },
        ],
        "unusual_activity": [],
    },
}


def get_options_analysis(symbol: str) -> dict[str, Any]:
    if symbol in OPTIONS:
        return copy.deepcopy(OPTIONS[symbol])
    return {
        "symbol": symbol,
        "current_price": 1000,
        "volatility": {"historical": 0.20, "implied": 0.20, "skew": "flat", "term": "flat"},
        "sentiment": {"put_call_ratio": 1.0, "interpretation": "Neutral market sentiment"},
        "strategies": [
            {
                "name": "Covered Call",
                "description": "Own the stock and sell a call option against it",
                "contracts": [_leg("sell", "call", 1050)],
                "max_profit": 5000,
                "max_loss": 95000,
                "breakeven": [950],
                "risk_reward_ratio": 19.0,
            }
        ],
        "unusual_activity": [],
    }
