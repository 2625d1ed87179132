"""
lookout/sdk/dom_utils.py

Helpers for reading and changing DOM state of a browsing context.

Contains:
- get_document_size, get_element_entire_size: content sizes
- get_element_rect, get_element_client_rect: element rects
- get_pixel_ratio, get_user_agent: environment info
- get_scroll_offset, scroll_to, get_translate_offset, translate_to, get_inner_offset, is_scrollable
- mark_scroll_root_element, get_transforms, set_transforms, get_overflow, set_overflow: style state
- get_context_info, get_child_frames_info: frame hierarchy
- add_page_marker, cleanup_page_marker: viewport marker
- blur_element, focus_element: best-effort caret handling
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any

from lookout.data_models.dom import ChildFrameInfo, ContextInfo, PageMarker
from lookout.data_models.geometry import Location, RectangleSize, Region
from lookout.sdk import snippets
from lookout.utils.best_effort import BestEffortResult, best_effort
from lookout.utils.exceptions import DriverOperationError

if TYPE_CHECKING:
    from lookout.sdk.context import BrowsingContext
    from lookout.sdk.element import Element


SCROLL_ROOT_ATTRIBUTE = "data-lookout-scroll"
TRANSFORM_PROPERTIES = ("transform", "-webkit-transform")
OVERFLOW_SETTLE = 0.2  # seconds for layout to follow an overflow change


def _to_location(value: dict[str, Any] | None) -> Location:
    value = value or {}
    return Location(x=value.get("x", 0), y=value.get("y", 0))


def get_document_size(context: BrowsingContext) -> RectangleSize:
    """
    Get the scrollable content size of the context's document.

    Raises:
        DriverOperationError: If the size could not be extracted.
    """
    try:
        size = context.execute(snippets.GET_DOCUMENT_SIZE) or {}
    except DriverOperationError as e:
        raise DriverOperationError(f"Failed to extract entire size! {e}") from e
    return RectangleSize(width=size.get("width", 0), height=size.get("height", 0))


def get_element_entire_size(context: BrowsingContext, element: Element) -> RectangleSize:
    """
    Get the scrollable content size of an element.

    Raises:
        DriverOperationError: If the size could not be extracted.
    """
    try:
        size = context.execute(snippets.GET_ELEMENT_CONTENT_SIZE, element) or {}
    except DriverOperationError as e:
        raise DriverOperationError(f"Failed to extract element size! {e}") from e
    return RectangleSize(width=size.get("width", 0), height=size.get("height", 0))


def get_element_rect(element: Element) -> Region:
    return element.get_rect()


def get_element_client_rect(element: Element) -> Region:
    return element.get_client_rect()


def get_pixel_ratio(context: BrowsingContext) -> float:
    return float(context.execute(snippets.GET_PIXEL_RATIO))


def get_user_agent(context: BrowsingContext) -> str:
    return context.execute(snippets.GET_USER_AGENT)


def get_scroll_offset(context: BrowsingContext, element: Element | None = None) -> Location:
    """Scroll position of an element, or of the document scrolling element."""
    return _to_location(context.execute(snippets.GET_ELEMENT_SCROLL_OFFSET, element))


def scroll_to(context: BrowsingContext, location: Location, element: Element | None = None) -> Location:
    """
    Scroll an element (or the document) to a position.

    Returns:
        The scroll position actually reached, which the browser may clamp.
    """
    offset = {"x": round(location.x), "y": round(location.y)}
    return _to_location(context.execute(snippets.SCROLL_TO, element, offset))


def get_translate_offset(context: BrowsingContext, element: Element | None = None) -> Location:
    return _to_location(context.execute(snippets.GET_ELEMENT_TRANSLATE_OFFSET, element))


def translate_to(context: BrowsingContext, location: Location, element: Element | None = None) -> Location:
    """
    Shift an element's content with a CSS translate transform.

    Returns:
        The translate position applied.
    """
    offset = {"x": round(location.x), "y": round(location.y)}
    return _to_location(context.execute(snippets.TRANSLATE_TO, element, offset))


def get_inner_offset(context: BrowsingContext, element: Element | None = None) -> Location:
    """Combined scroll and translate offset of an element's content."""
    return _to_location(context.execute(snippets.GET_ELEMENT_INNER_OFFSET, element))


def is_scrollable(context: BrowsingContext, element: Element | None = None) -> bool:
    return bool(context.execute(snippets.IS_ELEMENT_SCROLLABLE, element))


def mark_scroll_root_element(context: BrowsingContext, element: Element) -> None:
    """Tag an element as the scroll root of its document."""
    context.execute(snippets.SET_ELEMENT_ATTRIBUTES, element, {SCROLL_ROOT_ATTRIBUTE: "true"})


def get_transforms(context: BrowsingContext, element: Element | None = None) -> dict[str, str]:
    """Inline transform styles of an element, or of the document element."""
    return context.execute(snippets.GET_ELEMENT_STYLE_PROPERTIES, element, list(TRANSFORM_PROPERTIES)) or {}


def set_transforms(
    context: BrowsingContext,
    transforms: dict[str, str],
    element: Element | None = None,
) -> dict[str, str]:
    """
    Replace inline transform styles, e.g. with values saved by get_transforms.

    Returns:
        The values that were replaced.
    """
    return context.execute(snippets.SET_ELEMENT_STYLE_PROPERTIES, element, transforms) or {}


def get_overflow(context: BrowsingContext, element: Element | None = None) -> str | None:
    values = context.execute(snippets.GET_ELEMENT_STYLE_PROPERTIES, element, ["overflow"]) or {}
    return values.get("overflow")


def set_overflow(context: BrowsingContext, overflow: str, element: Element | None = None) -> str | None:
    """
    Set the inline overflow style and give the layout time to follow.

    Returns:
        The overflow value before the change.

    Raises:
        DriverOperationError: If the style could not be set.
    """
    try:
        original = context.execute(snippets.SET_ELEMENT_STYLE_PROPERTIES, element, {"overflow": overflow}) or {}
    except DriverOperationError as e:
        raise DriverOperationError(f"Failed to set overflow: {e}") from e
    time.sleep(OVERFLOW_SETTLE)
    return original.get("overflow")


def get_context_info(context: BrowsingContext) -> ContextInfo:
    """Where the context's document sits in the frame hierarchy."""
    return ContextInfo.model_validate(context.execute(snippets.GET_CONTEXT_INFO))


def get_child_frames_info(context: BrowsingContext) -> list[ChildFrameInfo]:
    return [ChildFrameInfo.model_validate(info) for info in context.execute(snippets.GET_CHILD_FRAMES_INFO) or []]


def add_page_marker(context: BrowsingContext) -> PageMarker:
    """Draw the viewport marker and return its geometry."""
    return PageMarker.model_validate(context.execute(snippets.ADD_PAGE_MARKER))


def cleanup_page_marker(context: BrowsingContext) -> None:
    context.execute(snippets.CLEANUP_PAGE_MARKER)


def blur_element(context: BrowsingContext, element: Element | None = None) -> BestEffortResult[Any]:
    """Blur an element (or the active element) to hide the caret."""
    return best_effort(
        "hiding caret",
        lambda: context.execute(snippets.BLUR_ELEMENT, element),
    )


def focus_element(context: BrowsingContext, element: Element) -> BestEffortResult[Any]:
    """Give focus back to an element previously blurred."""
    return best_effort(
        "restoring caret",
        lambda: context.execute(snippets.FOCUS_ELEMENT, element),
    )
