import logging

from .config import Settings, settings
from .errors import (
    EmptyRingError,
    InvalidPointError,
    InvalidTargetError,
    InvalidWeightError,
    RingError,
    RingInvariantError,
)
from .hashing import point_for
from .models import RingReport, TargetShare
from .ring import ConsistentHashRing, create_ring

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ConsistentHashRing",
    "EmptyRingError",
    "InvalidPointError",
    "InvalidTargetError",
    "InvalidWeightError",
    "RingError",
    "RingInvariantError",
    "RingReport",
    "Settings",
    "TargetShare",
    "create_ring",
    "point_for",
    "settings",
]
