"""Per-user play history tracking."""

from streamvibe.history.exceptions import HistoryUpdateError
from streamvibe.history.service import HistoryTracker, apply_play

__all__ = ["HistoryTracker", "HistoryUpdateError", "apply_play"]
