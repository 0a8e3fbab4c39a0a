"""
Session Module

Event storage and the per-session processing surface.
"""

from .event_store import EventSnapshot, EventStore
from .tracking_session import GazeTrackingSession

__all__ = [
    'EventSnapshot',
    'EventStore',
    'GazeTrackingSession',
]
