"""Mock fundamentals table used by ``analyzeFundamentals``."""

from __future__ import annotations

import copy
from typing import Any

FUNDAMENTALS: dict[str, dict[str, Any]] = {
    "RELIANCE": {
        "symbol": "RELIANCE",
        "name": "Reliance Industries Ltd",
        "sector": "Energy",
        "industry": "Oil & Gas Integrated",
        "current_price": 2650,
        "market_cap": 1_750_000_000_000,
        "financials": {
            "quarterly": {
                "revenue": {"value": 2_250_000_000_000, "growth": 0.15, "trend": "increasing"},
                "net_income": {"value": 180_000_000_000, "growth": 0.12, "trend": "increasing"},
                "eps": {"value": 26.5, "growth": 0.11, "trend": "increasing"},
                "operating_margin": {"value": 0.14, "trend": "improving"},
                "net_margin": {"value": 0.08, "trend": "stable"},
            },
            "annual": {
                "revenue": {"value": 8_500_000_000_000, "growth": 0.18, "trend": "increasing"},
                "net_income": {"value": 680_000_000_000, "growth": 0.15, "trend": "increasing"},
                "eps": {"value": 102.5, "growth": 0.14, "trend": "increasing"},
                "operating_margin": {"value": 0.15, "trend": "improving"},
                "net_margin": {"value": 0.08, "trend": "improving"},
            },
        },
        "valuation": {
            "pe_ratio": {
                "value": 25.8,
                "industry": 22.5,
                "assessment": "Trading at a premium to industry average, reflecting strong growth prospects and diversified business model.",
            },
            "pb_ratio": {
                "value": 2.8,
                "industry": 2.2,
                "assessment": "Slightly above industry average, indicating market confidence in the company's assets.",
            },
            "ev_to_ebitda": {
                "value": 12.5,
                "industry": 10.8,
                "assessment": "Premium valuation compared to peers, justified by strong growth in retail and digital services.",
            },
            "dividend_yield": {
                "value": 0.5,
                "industry": 1.2,
                "assessment": "Below industry average as the company reinvests for growth in new businesses.",
            },
            "roe": {
                "value": 11.2,
                "industry": 9.5,
                "assessment": "Above average return on equity, demonstrating efficient use of shareholder capital.",
            },
            "debt_to_equity": {
                "value": 0.45,
                "industry": 0.55,
                "assessment": "Lower leverage than industry peers, providing financial flexibility.",
            },
        },
        "strengths": [
            "Diversified business model across energy, retail, and digital services",
            "Strong cash flow generation from established businesses",
            "Market leader in telecom (Jio) and retail segments",
            "Significant scale advantages in petrochemicals",
        ],
        "weaknesses": [
            "High capital expenditure requirements",
            "Exposure to volatile oil and gas prices",
            "Lower dividend yield compared to peers",
        ],
        "opportunities": [
            "Expansion of digital services ecosystem",
            "Growth in organized retail market in India",
            "Renewable energy investments",
            "Value unlocking through potential listing of subsidiaries",
        ],
        "threats": [
            "Regulatory changes in telecom and retail",
            "Global shift away from fossil fuels",
            "Increasing competition in digital services",
            "Geopolitical risks affecting energy prices",
        ],
        "analyst_ratings": {
            "buy": 28,
            "hold": 5,
            "sell": 2,
            "consensus_target": 2950,
            "upside": 0.113,
        },
        "recommendation": {
            "rating": "buy",
            "reasoning": (
                "Reliance Industries presents a compelling investment case with its "
                "diversified business model and strong growth in retail and digital "
                "services. While the stock trades at a premium to the industry, this is "
                "justified by its market leadership and growth prospects. The company's "
                "lower debt levels provide financial flexibility for future investments."
            ),
            "target_price": 2950,
        },
    },
    "INFY": {
        "symbol": "INFY",
        "name": "Infosys Ltd",
        "sector": "Technology",
        "industry": "Information Technology Services",
        "current_price": 1600,
        "market_cap": 750_000_000_000,
        "financials": {
            "quarterly": {
                "revenue": {"value": 380_000_000_000, "growth": 0.08, "trend": "increasing"},
                "net_income": {"value": 65_000_000_000, "growth": 0.05, "trend": "stable"},
                "eps": {"value": 15.2, "growth": 0.05, "trend": "stable"},
                "operating_margin": {"value": 0.24, "trend": "stable"},
                "net_margin": {"value": 0.17, "trend": "stable"},
            },
            "annual": {
                "revenue": {"value": 1_450_000_000_000, "growth": 0.11, "trend": "increasing"},
                "net_income": {"value": 245_000_000_000, "growth": 0.09, "trend": "increasing"},
                "eps": {"value": 58.5, "growth": 0.09, "trend": "increasing"},
                "operating_margin": {"value": 0.25, "trend": "stable"},
                "net_margin": {"value": 0.17, "trend": "stable"},
            },
        },
        "valuation": {
            "pe_ratio": {
                "value": 27.3,
                "industry": 25.8,
                "assessment": "Slightly above industry average, reflecting quality business model and consistent performance.",
            },
            "pb_ratio": {
                "value": 8.5,
                "industry": 7.8,
                "assessment": "Premium to industry average, justified by high return on equity and asset-light business.",
            },
            "ev_to_ebitda": {
                "value": 18.2,
                "industry": 17.5,
                "assessment": "In line with industry peers, indicating fair valuation relative to operating performance.",
            },
            "dividend_yield": {
                "value": 2.0,
                "industry": 1.5,
                "assessment": "Above industry average, reflecting strong cash generation and shareholder-friendly policies.",
            },
            "roe": {
                "value": 28.5,
                "industry": 24.2,
                "assessment": "Superior return on equity compared to peers, demonstrating efficient operations.",
            },
            "debt_to_equity": {
                "value": 0.05,
                "industry": 0.15,
                "assessment": "Minimal debt levels, providing financial stability and flexibility.",
            },
        },
        "strengths": [
            "Strong brand reputation in IT services",
            "Diversified client base across industries and geographies",
            "Robust balance sheet with significant cash reserves",
            "High employee retention compared to industry",
        ],
        "weaknesses": [
            "Exposure to visa and immigration policy changes",
            "Wage inflation in key markets",
            "Slower growth compared to mid-tier competitors",
        ],
        "opportunities": [
            "Expansion in digital transformation services",
            "Cloud migration and AI implementation projects",
            "Strategic acquisitions to enhance capabilities",
            "Growth in healthcare and financial services verticals",
        ],
        "threats": [
            "Intense competition from global and Indian IT firms",
            "Potential economic slowdown affecting client spending",
            "Currency fluctuations impacting margins",
            "Rapid technological changes requiring continuous adaptation",
        ],
        "analyst_ratings": {
            "buy": 22,
            "hold": 12,
            "sell": 3,
            "consensus_target": 1750,
            "upside": 0.094,
        },
        "recommendation": {
            "rating": "buy",
            "reasoning": (
                "Infosys offers a compelling combination of growth, profitability, and "
                "shareholder returns. The company's strong position in digital services "
                "and cloud migration provides growth visibility, while its robust balance "
                "sheet offers protection against economic uncertainties. The stock's "
                "valuation is reasonable given its quality metrics and growth prospects."
            ),
            "target_price": 1750,
        },
    },
}

_IN_LINE = "In line with industry average."


def _default_profile(symbol: str) -> dict[str, Any]:
    return {
        "symbol": symbol,
        "name": f"{symbol} Ltd",
        "sector": "Unknown",
        "industry": "Unknown",
        "current_price": 1000,
        "market_cap": 100_000_000_000,
        "financials": {
            "quarterly": {
                "revenue": {"value": 25_000_000_000, "growth": 0.05, "trend": "stable"},
                "net_income": {"value": 3_000_000_000, "growth": 0.03, "trend": "stable"},
                "eps": {"value": 10, "growth": 0.03, "trend": "stable"},
                "operating_margin": {"value": 0.15, "trend": "stable"},
                "net_margin": {"value": 0.12, "trend": "stable"},
            },
            "annual": {
                "revenue": {"value": 100_000_000_000, "growth": 0.07, "trend": "stable"},
                "net_income": {"value": 12_000_000_000, "growth": 0.05, "trend": "stable"},
                "eps": {"value": 40, "growth": 0.05, "trend": "stable"},
                "operating_margin": {"value": 0.15, "trend": "stable"},
                "net_margin": {"value": 0.12, "trend": "stable"},
            },
        },
        "valuation": {
            "pe_ratio": {"value": 25, "industry": 25, "assessment": _IN_LINE},
            "pb_ratio": {"value": 3, "industry": 3, "assessment": _IN_LINE},
            "ev_to_ebitda": {"value": 15, "industry": 15, "assessment": _IN_LINE},
            "dividend_yield": {"value": 2, "industry": 2, "assessment": _IN_LINE},
            "roe": {"value": 15, "industry": 15, "assessment": _IN_LINE},
            "debt_to_equity": {"value": 0.1, "industry": 0.1, "assessment": _IN_LINE},
        },
        "strengths": [
            "Established market position",
            "Stable financial performance",
            "Experienced management team",
        ],
        "weaknesses": [
            "Average growth metrics",
            "Limited product differentiation",
            "Standard operational efficiency",
        ],
        "opportunities": [
            "Market expansion possibilities",
            "Potential for new product development",
            "Industry consolidation opportunities",
        ],
        "threats": [
            "Competitive market pressures",
            "Regulatory changes",
            "Economic cycle sensitivity",
        ],
        "analyst_ratings": {
            "buy": 5,
            "hold": 10,
            "sell": 5,
            "consensus_target": 1050,
            "upside": 0.05,
        },
        "recommendation": {
            "rating": "hold",
            "reasoning": (
                "The company shows stable performance but lacks clear catalysts for "
                "significant outperformance. Valuation appears fair relative to growth "
                "prospects and industry positioning."
            ),
            "target_price": 1050,
        },
    }


def get_fundamentals(symbol: str) -> dict[str, Any]:
    """Return a private copy of the profile for ``symbol``, or the default profile."""
    profile = FUNDAMENTALS.get(symbol)
    if profile is None:
        return _default_profile(symbol)
    return copy.deepcopy(profile)
