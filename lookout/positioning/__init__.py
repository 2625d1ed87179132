"""
lookout positioning module.

Position providers move the visible part of a context; region providers
supply regions lazily.
"""

from lookout.positioning.position_provider import (
    AbstractPositionProvider,
    CSSTranslatePositionProvider,
    ScrollPositionProvider,
)
from lookout.positioning.region_provider import NullRegionProvider, RegionProvider

__all__ = [
    "AbstractPositionProvider",
    "CSSTranslatePositionProvider",
    "NullRegionProvider",
    "RegionProvider",
    "ScrollPositionProvider",
]
