# nin_terminal/data/__init__.py
"""Static market tables backing the analysis tools."""

from .fundamentals import FUNDAMENTALS, get_fundamentals
from .holdings import USER_HOLDINGS
from .market import build_market_news, get_index_snapshot, get_market_overview
from .options import OPTIONS, get_options_analysis
from .screener import SCREENER_UNIVERSE
from .technicals import TECHNICALS, get_technicals

__all__ = [
    "FUNDAMENTALS",
    "OPTIONS",
    "SCREENER_UNIVERSE",
    "TECHNICALS",
    "USER_HOLDINGS",
    "build_market_news",
    "get_fundamentals",
    "get_index_snapshot",
    "get_market_overview",
    "get_options_analysis",
    "get_technicals",
]
