"""
Tagged results for lookups that may map, fail to map, or have nothing to map.

``Mapped`` carries the looked-up value, ``Unmapped`` means the input carried
information that could not be mapped, and ``PassThrough`` hands the original
input back because there was nothing to look up.
"""

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class Mapped:
    """A successful lookup."""
    value: Any


@dataclass(frozen=True)
class Unmapped:
    """The input was understood but yielded no value."""


@dataclass(frozen=True)
class PassThrough:
    """Nothing to look up; the original input is handed back."""
    original: Any


Resolution = Union[Mapped, Unmapped, PassThrough]


def unwrap(resolution: Resolution) -> Any:
    """
    Collapse a resolution into a plain value: the mapped value, None for
    unmapped input, or the original input for pass-through results.
    """
    if isinstance(resolution, Mapped):
        return resolution.value
    if isinstance(resolution, PassThrough):
        return resolution.original
    return None
