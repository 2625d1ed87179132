"""
lookout/sdk/visibility.py

Bringing a region into the top-level viewport across nested frames and
scrollable containers.

Every context has its own origin and scroll state. The correction starts
at the region's own context and walks up to the main context: each level
scrolls as much as it can, and whatever it could not absorb is carried to
the parent, shifted by where the frame sits inside that parent.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from lookout.data_models.geometry import Location, Region
from lookout.positioning.region_provider import RegionProvider
from lookout.utils.exceptions import DriverOperationError
from lookout.utils.logger import get_logger

if TYPE_CHECKING:
    from lookout.positioning.position_provider import AbstractPositionProvider
    from lookout.sdk.context import BrowsingContext


logger = get_logger(name=__name__)


def _scroll_level(
    context: BrowsingContext,
    position_provider: AbstractPositionProvider,
    remaining_offset: Location,
) -> Location:
    """
    Ask one level to scroll by `remaining_offset`; return what it applied.

    Without a designated scroll root the level scrolls its own document.
    """
    scroll_root_element = context.get_scroll_root_element()
    scroll_root_offset = (
        scroll_root_element.get_client_rect().location
        if scroll_root_element is not None
        else Location.ZERO
    )
    return position_provider.set_position(
        remaining_offset.offset_negative(scroll_root_offset),
        scroll_root_element,
        context=context,
    )


def ensure_region_visible(
    context: BrowsingContext,
    position_provider: AbstractPositionProvider,
    region: Region | RegionProvider | None,
) -> Location | None:
    """
    Scroll the context chain so that `region` is visible in the top-level viewport, as far as possible.

    Driver failures never escape, a lost connection included: a level that
    fails to scroll is counted as having applied nothing.

    Args:
        context: The context the region's coordinates are relative to.
        position_provider: Moves a context's scroll (or translate) position.
        region: Region in `context` coordinates, or a provider of it.

    Returns:
        None if nothing was attempted (no region, or a native surface),
        Location.ZERO if the region was already visible, otherwise the
        residual offset no level could satisfy.
    """
    if isinstance(region, RegionProvider):
        region = region.get_region()
    if region is None:
        return None
    if context.driver.is_native:
        logger.debug("NATIVE context identified, skipping 'ensure element visible'")
        return None

    try:
        context_viewport_location = context.get_location_in_viewport()
        region_in_viewport = region.offset_by_location(context_viewport_location)
        viewport_rect = context.main.get_rect()
        if viewport_rect.contains(region_in_viewport):
            return Location.ZERO
    except (DriverOperationError, ConnectionError) as e:
        logger.warning(f"Could not check region visibility, scrolling anyway: {e}")

    current_context: BrowsingContext | None = context
    remaining_offset = region.location
    while current_context is not None:
        try:
            actual_offset = _scroll_level(current_context, position_provider, remaining_offset)
        except (DriverOperationError, ConnectionError) as e:
            logger.warning(f"Failed to scroll context, carrying the offset to its parent: {e}")
            actual_offset = Location.ZERO

        try:
            client_location = current_context.get_client_location()
        except (DriverOperationError, ConnectionError) as e:
            logger.warning(f"Failed to locate frame in its parent: {e}")
            client_location = Location.ZERO

        remaining_offset = remaining_offset.offset_negative(actual_offset).offset_by_location(client_location)
        current_context = current_context.parent

    logger.debug(f"Residual offset after ensuring region visible: {remaining_offset}")
    return remaining_offset
