"""
General utility functions for the mvexport package.
"""

from datetime import datetime
from typing import Any, Iterable, List, Optional


def numbered_names(prefix: str, n: int) -> List[str]:
    """
    Build 1-based, contiguous column names.

    Args:
        prefix: Name prefix, e.g. 'PC' or 'Lag_PC'
        n: Number of names to build

    Returns:
        List of names [prefix1, ..., prefixn]
    """
    return [f"{prefix}{i}" for i in range(1, n + 1)]


def timestamp_string(fmt: str, now: Optional[datetime] = None) -> str:
    """
    Format the current time for use in a filename.

    Spaces are replaced with underscores.

    Args:
        fmt: strftime format
        now: Time to format (defaults to the current time)

    Returns:
        Formatted timestamp
    """
    if now is None:
        now = datetime.now()
    return now.strftime(fmt).replace(' ', '_')


def type_names(obj: Any) -> List[str]:
    """
    Names of the classes an object is an instance of, most specific first.
    """
    return [cls.__name__ for cls in type(obj).__mro__]


def missing_items(reference: Iterable[Any], available: Iterable[Any]) -> List[Any]:
    """
    Items of reference that are not in available, in reference order.
    """
    available_set = set(available)
    return [item for item in reference if item not in available_set]
