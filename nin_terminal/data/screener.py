"""Screening universe for ``screenStocks``.

``price_change`` values are percentages keyed by lookback period.
"""

SCREENER_UNIVERSE = [
    {
        "symbol": "RELIANCE",
        "name": "Reliance Industries Ltd",
        "sector": "Oil & Gas",
        "market_cap": 1_750_000_000_000,
        "price": 2650,
        "pe_ratio": 22.5,
        "dividend": 0.5,
        "price_change": {"1d": 0.8, "1w": 2.5, "1m": 5.2, "3m": 8.7, "6m": 12.3, "1y": 18.5},
        "volume": 5_000_000,
        "technicals": {
            "rsi": 62,
            "macd": "bullish",
            "moving_averages": {"ma50": 2550, "ma200": 2400},
        },
    },
    {
        "symbol": "TCS",
        "name": "Tata Consultancy Services Ltd",
        "sector": "IT",
        "market_cap": 1_250_000_000_000,
        "price": 3400,
        "pe_ratio": 28.2,
        "dividend": 1.2,
        "price_change": {"1d": 1.2, "1w": 3.5, "1m": 4.8, "3m": 7.2, "6m": 9.5, "1y": 15.2},
        "volume": 2_500_000,
        "technicals": {
            "rsi": 58,
            "macd": "bullish",
            "moving_averages": {"ma50": 3300, "ma200": 3100},
        },
    },
    {
        "symbol": "HDFCBANK",
        "name": "HDFC Bank Ltd",
        "sector": "Banking",
        "market_cap": 1_100_000_000_000,
        "price": 1550,
        "pe_ratio": 18.5,
        "dividend": 1.5,
        "price_change": {"1d": -0.5, "1w": 1.2, "1m": 3.5, "3m": 5.8, "6m": 8.2, "1y": 12.5},
        "volume": 4_000_000,
        "technicals": {
            "rsi": 45,
            "macd": "neutral",
            "moving_averages": {"ma50": 1520, "ma200": 1480},
        },
    },
    {
        "symbol": "INFY",
        "name": "Infosys Ltd",
        "sector": "IT",
        "market_cap": 750_000_000_000,
        "price": 1600,
        "pe_ratio": 24.8,
        "dividend": 2.0,
        "price_change": {"1d": 1.5, "1w": 4.2, "1m": 6.5, "3m": 9.8, "6m": 14.2, "1y": 20.5},
        "volume": 3_000_000,
        "technicals": {
            "rsi": 65,
            "macd": "bullish",
            "moving_averages": {"ma50": 1550, "ma200": 1450},
        },
    },
    {
        "symbol": "SUNPHARMA",
        "name": "Sun Pharmaceutical Industries Ltd",
        "sector": "Pharma",
        "market_cap": 500_000_000_000,
        "price": 1050,
        "pe_ratio": 32.5,
        "dividend": 0.8,
        "price_change": {"1d": -1.2, "1w": -2.5, "1m": -0.5, "3m": 2.5, "6m": 5.8, "1y": 8.5},
        "volume": 1_500_000,
        "technicals": {
            "rsi": 38,
            "macd": "bearish",
            "moving_averages": {"ma50": 1080, "ma200": 1020},
        },
    },
]
