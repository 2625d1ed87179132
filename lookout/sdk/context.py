"""
lookout/sdk/context.py

Browsing context tree.

A BrowsingContext is the main document or a frame nested inside another
context. The tree owns its nodes top-down through `children`; a child only
keeps a weak reference to its parent for navigation. Contexts are created
when a frame is entered and dropped when the session navigates away.
"""

from __future__ import annotations

import weakref
from abc import ABC, abstractmethod
from typing import Any

from lookout.data_models.geometry import CoordinatesType, Location, Region
from lookout.sdk.driver import AbstractDriver
from lookout.sdk.element import Element
from lookout.sdk.viewport import get_viewport_size


class BrowsingContext(ABC):
    """
    A node of the document/frame tree with its own coordinate origin and scroll state.

    Subclasses must implement:
    - execute(script, *args) -> Any
    - _create_frame_context(frame_element) -> BrowsingContext
    """

    def __init__(
        self,
        driver: AbstractDriver,
        parent: BrowsingContext | None = None,
        frame_element: Element | None = None,
        scroll_root_element: Element | None = None,
    ) -> None:
        self.driver = driver
        self._parent_ref = weakref.ref(parent) if parent is not None else None
        self.frame_element = frame_element
        self.scroll_root_element = scroll_root_element
        self.children: list[BrowsingContext] = []

    ## Tree navigation

    @property
    def parent(self) -> BrowsingContext | None:
        return self._parent_ref() if self._parent_ref is not None else None

    @property
    def is_main(self) -> bool:
        return self._parent_ref is None

    @property
    def main(self) -> BrowsingContext:
        """The root context of the tree."""
        context = self
        while context.parent is not None:
            context = context.parent
        return context

    @property
    def path(self) -> list[BrowsingContext]:
        """Contexts from the root down to this one."""
        path: list[BrowsingContext] = []
        context: BrowsingContext | None = self
        while context is not None:
            path.append(context)
            context = context.parent
        return list(reversed(path))

    def enter_frame(self, frame_element: Element) -> BrowsingContext:
        """
        Create the context of a frame embedded in this context.

        Args:
            frame_element: The frame element, found in this context.

        Returns:
            The child context, now owned by this context.
        """
        child = self._create_frame_context(frame_element)
        self.children.append(child)
        return child

    def discard_frames(self) -> None:
        """Drop every child context, e.g. after a navigation."""
        for child in self.children:
            child.discard_frames()
        self.children.clear()

    ## Remote execution

    @abstractmethod
    def execute(self, script: str, *args: Any) -> Any:
        """
        Run a script in this context and return its (deserialized) result.

        Raises:
            DriverOperationError: If the script throws or the call fails.
        """
        ...

    @abstractmethod
    def _create_frame_context(self, frame_element: Element) -> BrowsingContext:
        ...

    ## Geometry

    def get_scroll_root_element(self) -> Element | None:
        """The designated scroll-root element, or None for document-level scrolling."""
        return self.scroll_root_element

    def get_client_location(self) -> Location:
        """Where this context's origin sits in its parent's coordinate space."""
        if self.frame_element is None:
            return Location.ZERO
        return self.frame_element.get_client_rect().location

    def get_location_in_viewport(self) -> Location:
        """Cumulative offset of this context's origin inside the top-level viewport."""
        location = Location.ZERO
        context: BrowsingContext | None = self
        while context is not None and not context.is_main:
            location = location.offset_by_location(context.get_client_location())
            context = context.parent
        return location

    def get_rect(self) -> Region:
        """This context's visible rect in top-level viewport coordinates."""
        return Region.from_location_and_size(
            location=self.get_location_in_viewport(),
            size=get_viewport_size(self),
            coordinates_type=CoordinatesType.CONTEXT_RELATIVE,
        )
