"""Static market snapshot and news feed used by the market tools."""

from __future__ import annotations

import copy
from datetime import date, timedelta
from typing import Any

MARKET_OVERVIEW: dict[str, Any] = {
    "overview": {
        "market_trend": "bullish",
        "key_indices": {
            "NIFTY 50": {"value": 22450.25, "change": 125.75, "percent_change": 0.56},
            "SENSEX": {"value": 73850.45, "change": 412.30, "percent_change": 0.56},
            "NIFTY BANK": {"value": 48250.80, "change": 320.45, "percent_change": 0.67},
        },
        "summary": (
            "Markets are showing strength with broad-based buying across sectors. "
            "Global cues remain positive with US markets hitting new highs."
        ),
    },
    "sectors": {
        "top_performing": [
            {"name": "IT", "change": 1.8},
            {"name": "Banking", "change": 1.2},
            {"name": "Auto", "change": 0.9},
        ],
        "worst_performing": [
            {"name": "Pharma", "change": -0.5},
            {"name": "FMCG", "change": -0.3},
            {"name": "Metal", "change": -0.1},
        ],
        "analysis": (
            "IT sector is leading the gains on the back of strong Q1 results and "
            "positive management commentary. Banking stocks are also performing well "
            "due to improving credit growth and asset quality."
        ),
    },
    "technical_indicators": {
        "macd": "bullish",
        "rsi": 62.5,
        "moving_averages": {
            "50-day": {"value": 21800, "signal": "buy"},
            "100-day": {"value": 21200, "signal": "buy"},
            "200-day": {"value": 20500, "signal": "buy"},
        },
        "analysis": (
            "Technical indicators are showing bullish momentum with RSI at 62.5, "
            "indicating room for further upside. All major moving averages are "
            "suggesting a buy signal."
        ),
    },
    "news_impact": {
        "recent_news": [
            {"headline": "RBI Maintains Repo Rate at 6.5%", "impact": "neutral", "source": "Economic Times"},
            {"headline": "IT Companies Report Strong Q1 Earnings", "impact": "positive", "source": "Business Standard"},
            {"headline": "Global Markets Hit New Highs", "impact": "positive", "source": "Financial Express"},
        ],
        "analysis": (
            "Recent news flow has been positive for the markets, especially for the "
            "IT sector. The RBI policy was on expected lines, maintaining a neutral stance."
        ),
    },
}


def get_market_overview() -> dict[str, Any]:
    return copy.deepcopy(MARKET_OVERVIEW)


def get_index_snapshot() -> dict[str, Any]:
    """Index levels published as the ``market-data`` resource."""
    indices = MARKET_OVERVIEW["overview"]["key_indices"]
    return {
        "indices": [
            {"name": name, **values} for name, values in indices.items()
        ],
        "market_trend": MARKET_OVERVIEW["overview"]["market_trend"],
    }


def _news_item(
    title: str,
    source: str,
    on: date,
    summary: str,
    url: str,
    impact: str,
    related: list[str],
    sentiment: str = "positive",
) -> dict[str, Any]:
    return {
        "title": title,
        "source": source,
        "date": on.isoformat(),
        "summary": summary,
        "url": url,
        "sentiment": sentiment,
        "impact": impact,
        "related_symbols": related,
    }


def build_market_news(today: date) -> dict[str, Any]:
    """Build the news feed with items dated ``today`` and the two following days."""
    tomorrow = today + timedelta(days=1)
    day_after = today + timedelta(days=2)

    return {
        "top_news": [
            _news_item(
                "RBI Maintains Repo Rate at 6.5%, Focuses on Inflation Control",
                "Economic Times",
                today,
                "The Reserve Bank of India (RBI) kept the repo rate unchanged at 6.5% for "
                "the fifth consecutive policy meeting, prioritizing inflation management "
                "while maintaining an optimistic outlook on economic growth. The central "
                "bank projected GDP growth at 7% for the fiscal year.",
                "https://economictimes.indiatimes.com/news/economy/policy",
                "medium",
                ["RBI"],
            ),
            _news_item(
                "US Treasury Yields Rise, Fed Faces Inflation Expectations",
                "Federal Reserve",
                tomorrow,
                "Longer-dated US Treasury yields moved higher as investors priced in "
                "sticky inflation, keeping pressure on the Federal Reserve's rate path.",
                "https://www.federalreserve.gov/monetarypolicy/fomccalendars.htm",
                "medium",
                ["Treasury Yield Curve"],
            ),
            _news_item(
                "China's Economy Hits Record High, Boosts Trade",
                "Economic Times",
                day_after,
                "China's economy has reached a record high, with trade volumes surpassing "
                "previous records. The country's central bank has announced a series of "
                "monetary policy measures to support the economy.",
                "https://economictimes.indiatimes.com/news/international/business",
                "high",
                ["China"],
            ),
        ],
        "sector_news": {
            "Technology": [
                _news_item(
                    "Apple Inc. (AAPL) Records Strong Year-End Performance",
                    "MarketWatch",
                    today,
                    "Apple Inc. (AAPL) has recorded strong year-end performance, with a "
                    "20% gain in stock price.",
                    "https://www.marketwatch.com/investing/stock/aapl",
                    "high",
                    ["AAPL"],
                ),
                _news_item(
                    "Microsoft Corp. (MSFT) Hits Record High, Boosts Revenue",
                    "Financial Times",
                    tomorrow,
                    "Microsoft Corp. (MSFT) has reached a record high in stock price, with "
                    "a 15% gain in the past month.",
                    "https://markets.ft.com/data/equities/tearsheet/summary?s=MSFT:NSQ",
                    "high",
                    ["MSFT"],
                ),
            ],
            "Healthcare": [
                _news_item(
                    "Johnson & Johnson (JNJ) Records Strong Year-End Performance",
                    "Investing.com",
                    today,
                    "Johnson & Johnson (JNJ) has recorded strong year-end performance, "
                    "with a 10% gain in stock price.",
                    "https://www.investing.com/equities/johnson-johnson",
                    "high",
                    ["JNJ"],
                ),
                _news_item(
                    "P&G (PG) Records Strong Year-End Performance",
                    "MarketWatch",
                    tomorrow,
                    "P&G (PG) has recorded strong year-end performance, with a 5% gain "
                    "in stock price.",
                    "https://www.marketwatch.com/investing/stock/pg",
                    "high",
                    ["PG"],
                ),
            ],
        },
        "economic_calendar": [
            {
                "title": "US GDP Growth Rate Hits Record High",
                "date": today.isoformat(),
                "country": "United States",
                "actual": "7.5%",
                "forecast": "7.5%",
                "previous": "7.0%",
                "impact": "high",
                "description": "The United States' GDP growth rate reached 7.5% in the past quarter.",
            },
            {
                "title": "China's GDP Growth Rate Hits Record High",
                "date": tomorrow.isoformat(),
                "country": "China",
                "actual": "9.0%",
                "forecast": "9.0%",
                "previous": "8.5%",
                "impact": "high",
                "description": "China's GDP growth rate reached 9.0% in the past quarter.",
            },
        ],
    }
