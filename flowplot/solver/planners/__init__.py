"""
Planners Package - Concrete path planner implementations.

Import this module to register all built-in planners.
"""

from .nearest import NearestPlanner
from .scan import ScanPlanner

__all__ = [
    "NearestPlanner",
    "ScanPlanner",
]
