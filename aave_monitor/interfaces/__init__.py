"""Protocol interfaces for the health monitor."""
from .notifier import Notifier
from .position_source import PositionSource

__all__ = ["Notifier", "PositionSource"]
