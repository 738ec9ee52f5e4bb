"""
Planner Registry - Maps planner names to PathPlanner classes.

Built-in planners register themselves when flowplot.solver.planners is
imported (pathfind does this), so lookups always see them.
"""

from typing import Dict, List, Optional, Type

from .base import PathPlanner

DEFAULT_PLANNER = "nearest"

_PLANNERS: Dict[str, Type[PathPlanner]] = {}


def register_planner(cls: Type[PathPlanner]) -> Type[PathPlanner]:
    """
    Class decorator adding a planner under its ``name``.

    Raises:
        ValueError: If a different class already uses that name
    """
    existing = _PLANNERS.get(cls.name)
    if existing is not None and existing is not cls:
        raise ValueError(
            f"Planner name '{cls.name}' already taken by {existing.__name__}"
        )
    _PLANNERS[cls.name] = cls
    return cls


def create_planner(name: Optional[str] = None) -> PathPlanner:
    """
    Instantiate a registered planner.

    Args:
        name: Planner name, or None for DEFAULT_PLANNER

    Returns:
        New planner instance

    Raises:
        ValueError: If no planner has that name
    """
    name = name or DEFAULT_PLANNER
    try:
        return _PLANNERS[name]()
    except KeyError:
        raise ValueError(
            f"Unknown planner: {name}. Available: {', '.join(_PLANNERS)}"
        ) from None


def get_planner_names() -> List[str]:
    """Registered planner names, in registration order."""
    return list(_PLANNERS)


def get_planner_info() -> List[Dict[str, str]]:
    """Name and description of every planner, for CLI help text."""
    return [{"name": name, "description": cls.description}
            for name, cls in _PLANNERS.items()]
