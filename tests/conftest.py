"""
tests/conftest.py

Configuration for pytest: in-memory driver, context tree and clock fakes.
"""

from collections.abc import Callable
from typing import Any
from unittest.mock import MagicMock, patch

import pytest

from lookout.data_models.geometry import Location, RectangleSize, Region
from lookout.sdk import snippets
from lookout.sdk.context import BrowsingContext
from lookout.sdk.driver import AbstractDriver
from lookout.sdk.element import Element
from lookout.utils.exceptions import DriverOperationError


class FakeDriver(AbstractDriver):
    """
    Browser window whose viewport is the window minus a fixed decoration.

    `window_manager` maps a requested window size to the size the window
    actually gets, to simulate snapping.
    """

    def __init__(
        self,
        window_size: RectangleSize = RectangleSize(width=1024, height=768),
        decoration: RectangleSize = RectangleSize(width=16, height=120),
        native: bool = False,
        orientation: str = "portrait",
        window_manager: Callable[[RectangleSize], RectangleSize] | None = None,
        fail_move: bool = False,
        fail_resize: bool = False,
    ) -> None:
        self.window_location = Location(x=25, y=40)
        self.window_size = window_size
        self.decoration = decoration
        self.native = native
        self.orientation = orientation
        self.window_manager = window_manager or (lambda size: size)
        self.fail_move = fail_move
        self.fail_resize = fail_resize
        self.set_window_rect_calls: list[tuple[Location | None, RectangleSize | None]] = []

    @property
    def is_native(self) -> bool:
        return self.native

    @property
    def viewport_size(self) -> RectangleSize:
        return RectangleSize(
            width=self.window_size.width - self.decoration.width,
            height=self.window_size.height - self.decoration.height,
        )

    @property
    def resize_requests(self) -> list[RectangleSize]:
        return [size for _, size in self.set_window_rect_calls if size is not None]

    def get_window_rect(self) -> Region:
        return Region.from_location_and_size(self.window_location, self.window_size)

    def set_window_rect(
        self,
        location: Location | None = None,
        size: RectangleSize | None = None,
    ) -> None:
        self.set_window_rect_calls.append((location, size))
        if location is not None:
            if self.fail_move:
                raise DriverOperationError("window cannot be moved")
            self.window_location = location
        if size is not None:
            if self.fail_resize:
                raise DriverOperationError("window cannot be resized")
            self.window_size = self.window_manager(size)

    def get_orientation(self) -> str:
        return self.orientation


class FakeContext(BrowsingContext):
    """
    Context answering the viewport, element-rect, scroll and translate
    snippets from memory.

    `element_rects` maps element handles found in this context to
    {"x", "y", "width", "height"} dicts. `scroll` is the document scroll
    position, clamped to `max_scroll` when one is set; element scroll
    positions live in `element_scrolls`.
    """

    def __init__(
        self,
        driver: FakeDriver,
        parent: "FakeContext | None" = None,
        frame_element: Element | None = None,
        scroll_root_element: Element | None = None,
        viewport_size: RectangleSize | None = None,
    ) -> None:
        super().__init__(
            driver=driver,
            parent=parent,
            frame_element=frame_element,
            scroll_root_element=scroll_root_element,
        )
        self.viewport_size = viewport_size
        self.element_rects: dict[Any, dict[str, float]] = {}
        self.scroll = Location.ZERO
        self.max_scroll: Location | None = None
        self.element_scrolls: dict[Any, Location] = {}
        self.translate = Location.ZERO
        self.executed: list[tuple[str, tuple[Any, ...]]] = []

    def add_element(self, handle: str, x: float, y: float, width: float, height: float) -> Element:
        self.element_rects[handle] = {"x": x, "y": y, "width": width, "height": height}
        return Element(self, handle)

    def execute(self, script: str, *args: Any) -> Any:
        self.executed.append((script, args))
        if script == snippets.GET_VIEWPORT_SIZE:
            size = self.viewport_size or self.driver.viewport_size
            return {"width": size.width, "height": size.height}
        if script == snippets.GET_ELEMENT_RECT:
            element = args[0]
            if element.handle not in self.element_rects:
                raise DriverOperationError(f"stale element {element.handle}")
            return self.element_rects[element.handle]
        if script == snippets.SCROLL_TO:
            element, offset = args
            reached = self._clamp(Location(x=offset["x"], y=offset["y"]))
            if element is None:
                self.scroll = reached
            else:
                self.element_scrolls[element.handle] = reached
            return {"x": reached.x, "y": reached.y}
        if script == snippets.GET_ELEMENT_SCROLL_OFFSET:
            element = args[0]
            current = self.scroll if element is None else self.element_scrolls.get(element.handle, Location.ZERO)
            return {"x": current.x, "y": current.y}
        if script == snippets.TRANSLATE_TO:
            offset = args[1]
            self.translate = Location(x=offset["x"], y=offset["y"])
            return dict(offset)
        if script == snippets.GET_ELEMENT_TRANSLATE_OFFSET:
            return {"x": self.translate.x, "y": self.translate.y}
        raise DriverOperationError("unsupported script")

    def _clamp(self, location: Location) -> Location:
        if self.max_scroll is None:
            return location
        return Location(
            x=max(0, min(location.x, self.max_scroll.x)),
            y=max(0, min(location.y, self.max_scroll.y)),
        )

    def _create_frame_context(self, frame_element: Element) -> "FakeContext":
        rect = self.element_rects[frame_element.handle]
        return FakeContext(
            self.driver,
            parent=self,
            frame_element=frame_element,
            viewport_size=RectangleSize(width=rect["width"], height=rect["height"]),
        )


class FakeClock:
    """Stand-in for the `time` module: sleeping advances the monotonic clock."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleep = MagicMock(side_effect=self._advance)

    def _advance(self, seconds: float) -> None:
        self.now += seconds

    def monotonic(self) -> float:
        return self.now


@pytest.fixture
def driver() -> FakeDriver:
    """1024x768 browser window with a 16x120 decoration, so a 1008x648 viewport."""
    return FakeDriver()


@pytest.fixture
def main_context(driver: FakeDriver) -> FakeContext:
    """Main context of the fake driver."""
    return FakeContext(driver)


@pytest.fixture
def poll_clock() -> FakeClock:
    """Patch the clock used by the poll executor."""
    clock = FakeClock()
    with patch("lookout.sdk.poll_executor.time", new=clock):
        yield clock


@pytest.fixture
def viewport_clock() -> FakeClock:
    """Patch the clock used by the viewport sizer."""
    clock = FakeClock()
    with patch("lookout.sdk.viewport.time", new=clock):
        yield clock


@pytest.fixture
def make_driver() -> Callable[..., FakeDriver]:
    """
    Factory fixture to create a FakeDriver.

    Usage:
        driver = make_driver(window_manager=lambda size: ..., fail_move=True)
    """
    return FakeDriver


@pytest.fixture
def make_context() -> Callable[..., FakeContext]:
    """
    Factory fixture to create a FakeContext.

    Usage:
        context = make_context(driver)
        context = make_context(driver, scroll_root_element=...)
    """
    return FakeContext
