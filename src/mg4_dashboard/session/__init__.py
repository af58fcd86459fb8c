"""Trip session state: telemetry, trip counters and navigation.

Public API
----------
TripSessionModel    - owns the session state; tick/plan/start/stop/reset
SessionTicker       - periodic tick thread
NavigationState     - is_navigating + active route
TripStats           - trip distance / battery used since last reset
SessionState        - read-only projection handed to observers
NavigationError     - raised when navigation starts with nothing planned
"""

from mg4_dashboard.session.model import NavigationError, TripSessionModel
from mg4_dashboard.session.models import NavigationState, SessionState, TripStats
from mg4_dashboard.session.ticker import SessionTicker

__all__ = [
    "NavigationError",
    "NavigationState",
    "SessionState",
    "SessionTicker",
    "TripSessionModel",
    "TripStats",
]
