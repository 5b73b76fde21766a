"""
nestif

Reports Go if statements whose nested conditionals are too deep to read
comfortably.
"""

import logging

__version__ = "1.0.0"

from nestif.core.checker import Checker
from nestif.core.config import Config
from nestif.core.issue import Issue, Position

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Checker",
    "Config",
    "Issue",
    "Position",
]
