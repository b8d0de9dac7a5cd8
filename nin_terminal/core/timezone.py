"""
Timezone utilities for the application.

Market dates are rendered in IST (India Standard Time), the exchange
timezone of NSE and BSE.
"""

from datetime import datetime, timedelta, timezone

# IST (UTC+5:30)
IST = timezone(timedelta(hours=5, minutes=30))


def now_ist() -> datetime:
    """
    Get current datetime in IST.

    Returns:
        datetime: Current datetime with IST timezone
    """
    return datetime.now(IST)
