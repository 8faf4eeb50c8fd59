# Integration Module
"""
Lab session facade and the hash-chained event log that records it.
"""

from .event_logger import EventType, LabEvent, EventLogger
from .lab import RSALab

__all__ = [
    'EventType',
    'LabEvent',
    'EventLogger',
    'RSALab',
]
