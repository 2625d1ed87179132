"""
lookout/positioning/position_provider.py

Position providers: capabilities that try to move a context to an offset
and report the offset actually reached.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from lookout.data_models.geometry import Location
from lookout.sdk import dom_utils
from lookout.utils.logger import get_logger

if TYPE_CHECKING:
    from lookout.sdk.context import BrowsingContext
    from lookout.sdk.element import Element


logger = get_logger(name=__name__)


class AbstractPositionProvider(ABC):
    """
    Moves the visible part of a context.

    Subclasses must implement:
    - get_current_position(element, context) -> Location
    - set_position(location, element, context) -> Location

    The provider acts on `element` inside the element's own context. Without
    an element it acts on the document scrolling element of `context`, or of
    the provider's own context when no context is given either.
    """

    def __init__(self, context: BrowsingContext) -> None:
        self.context = context

    def _target_context(
        self,
        element: Element | None,
        context: BrowsingContext | None,
    ) -> BrowsingContext:
        if element is not None:
            return element.context
        return context if context is not None else self.context

    @abstractmethod
    def get_current_position(
        self,
        element: Element | None = None,
        context: BrowsingContext | None = None,
    ) -> Location:
        ...

    @abstractmethod
    def set_position(
        self,
        location: Location,
        element: Element | None = None,
        context: BrowsingContext | None = None,
    ) -> Location:
        """
        Try to move to `location`.

        Returns:
            The position actually applied; it may fall short of the request.
        """
        ...


class ScrollPositionProvider(AbstractPositionProvider):
    """Moves by scrolling; the browser clamps the position to the scroll bounds."""

    def get_current_position(
        self,
        element: Element | None = None,
        context: BrowsingContext | None = None,
    ) -> Location:
        return dom_utils.get_scroll_offset(self._target_context(element, context), element)

    def set_position(
        self,
        location: Location,
        element: Element | None = None,
        context: BrowsingContext | None = None,
    ) -> Location:
        logger.debug(f"Scrolling to {location}")
        actual = dom_utils.scroll_to(self._target_context(element, context), location, element)
        logger.debug(f"Scrolled to {actual}")
        return actual


class CSSTranslatePositionProvider(AbstractPositionProvider):
    """Moves by applying a CSS translate transform, which is not bounded by the scroll size."""

    def get_current_position(
        self,
        element: Element | None = None,
        context: BrowsingContext | None = None,
    ) -> Location:
        return dom_utils.get_translate_offset(self._target_context(element, context), element)

    def set_position(
        self,
        location: Location,
        element: Element | None = None,
        context: BrowsingContext | None = None,
    ) -> Location:
        logger.debug(f"Translating to {location}")
        return dom_utils.translate_to(self._target_context(element, context), location, element)
