"""
lookout/sdk/viewport.py

Reading and setting the viewport size of a browser window.

The viewport cannot be resized directly: the window is resized instead,
compensating for the decoration (toolbars, borders) around the viewport.
Window managers may snap or scale the requested size, so the resize is
retried with a correction and verified once more at the end.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from lookout.config import Config
from lookout.data_models.geometry import Location, RectangleSize
from lookout.sdk import snippets
from lookout.utils.best_effort import best_effort
from lookout.utils.exceptions import DriverOperationError, ViewportResizeError
from lookout.utils.logger import get_logger

if TYPE_CHECKING:
    from lookout.sdk.context import BrowsingContext


logger = get_logger(name=__name__)


def get_viewport_size(context: BrowsingContext) -> RectangleSize:
    """
    Get the viewport size of a context.

    Native surfaces have no DOM viewport, so the window rect is used and
    swapped when the device reports landscape for a portrait-shaped rect.
    """
    if not context.driver.is_native:
        size = context.execute(snippets.GET_VIEWPORT_SIZE)
        viewport_size = RectangleSize(width=size["width"], height=size["height"])
    else:
        viewport_size = context.driver.get_window_rect().size
        if viewport_size.height > viewport_size.width:
            if context.driver.get_orientation() == "landscape":
                viewport_size = RectangleSize(width=viewport_size.height, height=viewport_size.width)
    logger.debug(f"Viewport size: {viewport_size}")
    return viewport_size


def _set_window_size(
    context: BrowsingContext,
    window_size: RectangleSize,
    settle: float,
    retries: int,
) -> bool:
    """
    Resize the window until it reports `window_size`.

    After each mismatch the size to send is corrected by the error the
    window manager introduced: `sent - (actual - sent)`.

    Returns:
        True if the window reached the size, False when retries ran out or the driver failed.
    """
    size_to_send = window_size
    try:
        while retries >= 0:
            logger.debug(f"Attempt to set window size to {size_to_send}. Retries left: {retries}")
            context.driver.set_window_rect(size=size_to_send)
            time.sleep(settle)
            actual_window_size = context.driver.get_window_rect().size
            if actual_window_size == window_size:
                return True
            logger.debug(
                f"Attempt to set window size to {window_size} failed. actual_window_size={actual_window_size}"
            )
            size_to_send = RectangleSize(
                width=size_to_send.width - (actual_window_size.width - size_to_send.width),
                height=size_to_send.height - (actual_window_size.height - size_to_send.height),
            )
            retries -= 1
        logger.warning("Failed to set browser size: no more retries.")
        return False
    except DriverOperationError as e:
        logger.warning(f"Failed to set browser size: error thrown. {e}")
        return False


def set_viewport_size(
    context: BrowsingContext,
    viewport_size: RectangleSize,
    settle: float | None = None,
    retries: int | None = None,
) -> bool:
    """
    Resize the browser window so its viewport gets exactly `viewport_size`.

    Args:
        context: Main context of the window.
        viewport_size: Required viewport size.
        settle: Seconds to wait after each resize; defaults to Config.WINDOW_RESIZE_SETTLE.
        retries: Corrective attempts after the first one; defaults to Config.WINDOW_RESIZE_RETRIES.

    Returns:
        True once the viewport has the required size.

    Raises:
        ViewportResizeError: If the viewport still has a different size after all retries.
    """
    settle = Config.WINDOW_RESIZE_SETTLE if settle is None else settle
    retries = Config.WINDOW_RESIZE_RETRIES if retries is None else retries
    logger.info(f"Setting viewport size to {viewport_size}")

    actual_viewport_size = get_viewport_size(context)
    logger.debug(f"Initial viewport size: {actual_viewport_size}")
    if actual_viewport_size == viewport_size:
        return True

    # the window has the most room to grow from the top-left corner
    best_effort(
        "moving the browser window to (0,0)",
        lambda: context.driver.set_window_rect(location=Location.ZERO),
    )

    actual_window_size = context.driver.get_window_rect().size
    actual_viewport_size = get_viewport_size(context)
    window_size = RectangleSize(
        width=actual_window_size.width + (viewport_size.width - actual_viewport_size.width),
        height=actual_window_size.height + (viewport_size.height - actual_viewport_size.height),
    )

    _set_window_size(context, window_size, settle=settle, retries=retries)
    actual_viewport_size = get_viewport_size(context)
    if actual_viewport_size == viewport_size:
        return True

    logger.warning(
        f"Failed attempt to set viewport size. actual_viewport_size={actual_viewport_size}, "
        f"required_viewport_size={viewport_size}"
    )
    raise ViewportResizeError(required=viewport_size, actual=actual_viewport_size)
