"""
tests/unit/sdk/test_dom_utils.py

Unit tests for the DOM helpers.
"""

from unittest.mock import MagicMock, patch

import pytest

from lookout.data_models.dom import ChildFrameInfo, ContextInfo, PageMarker
from lookout.data_models.geometry import CoordinatesType, Location, RectangleSize, Region
from lookout.sdk import dom_utils, snippets
from lookout.sdk.element import Element
from lookout.utils.exceptions import DriverOperationError


@pytest.fixture
def context() -> MagicMock:
    return MagicMock()


class TestSizes:
    """Tests for document and element size extraction."""

    def test_document_size(self, context: MagicMock) -> None:
        context.execute.return_value = {"width": 1200, "height": 5400}

        assert dom_utils.get_document_size(context) == RectangleSize(width=1200, height=5400)

    def test_document_size_failure_is_wrapped(self, context: MagicMock) -> None:
        context.execute.side_effect = DriverOperationError("no document")

        with pytest.raises(DriverOperationError, match="Failed to extract entire size!"):
            dom_utils.get_document_size(context)

    def test_element_entire_size_defaults_missing_fields(self, context: MagicMock) -> None:
        context.execute.return_value = {"width": 10}
        element = Element(context, "el")

        assert dom_utils.get_element_entire_size(context, element) == RectangleSize(width=10, height=0)
        context.execute.assert_called_once_with(snippets.GET_ELEMENT_CONTENT_SIZE, element)


class TestElementRects:
    """Tests for element rect helpers."""

    def test_client_rect_is_context_relative(self, context: MagicMock) -> None:
        context.execute.return_value = {"x": 1, "y": 2, "width": 3, "height": 4}
        element = Element(context, "el")

        rect = dom_utils.get_element_client_rect(element)

        assert rect == Region(left=1, top=2, width=3, height=4, coordinates_type=CoordinatesType.CONTEXT_RELATIVE)
        context.execute.assert_called_once_with(snippets.GET_ELEMENT_RECT, element, True)

    def test_rect_excludes_client_adjustment(self, context: MagicMock) -> None:
        context.execute.return_value = {"x": 0, "y": 0, "width": 5, "height": 5}
        element = Element(context, "el")

        dom_utils.get_element_rect(element)

        context.execute.assert_called_once_with(snippets.GET_ELEMENT_RECT, element, False)


class TestEnvironment:
    """Tests for pixel ratio, user agent and scroll helpers."""

    def test_pixel_ratio_is_parsed(self, context: MagicMock) -> None:
        context.execute.return_value = "2.5"
        assert dom_utils.get_pixel_ratio(context) == 2.5

    def test_user_agent(self, context: MagicMock) -> None:
        context.execute.return_value = "Mozilla/5.0"
        assert dom_utils.get_user_agent(context) == "Mozilla/5.0"

    def test_inner_offset(self, context: MagicMock) -> None:
        context.execute.return_value = {"x": 0, "y": 120}
        assert dom_utils.get_inner_offset(context) == Location(x=0, y=120)

    def test_is_scrollable(self, context: MagicMock) -> None:
        context.execute.return_value = True
        assert dom_utils.is_scrollable(context) is True


class TestStyleState:
    """Tests for scroll-root marking, transforms and overflow."""

    def test_mark_scroll_root_element(self, context: MagicMock) -> None:
        element = Element(context, "scroller")

        dom_utils.mark_scroll_root_element(context, element)

        context.execute.assert_called_once_with(
            snippets.SET_ELEMENT_ATTRIBUTES, element, {"data-lookout-scroll": "true"}
        )

    def test_get_transforms_of_document(self, context: MagicMock) -> None:
        context.execute.return_value = {"transform": "translate(0px, -40px)", "-webkit-transform": ""}

        transforms = dom_utils.get_transforms(context)

        assert transforms["transform"] == "translate(0px, -40px)"
        context.execute.assert_called_once_with(
            snippets.GET_ELEMENT_STYLE_PROPERTIES, None, ["transform", "-webkit-transform"]
        )

    def test_set_transforms_returns_replaced_values(self, context: MagicMock) -> None:
        """Saved transforms can be put back with a second call."""
        context.execute.return_value = {"transform": "translate(0px, -40px)"}
        element = Element(context, "el")

        replaced = dom_utils.set_transforms(context, {"transform": ""}, element)

        assert replaced == {"transform": "translate(0px, -40px)"}
        context.execute.assert_called_once_with(snippets.SET_ELEMENT_STYLE_PROPERTIES, element, {"transform": ""})

    def test_get_overflow(self, context: MagicMock) -> None:
        context.execute.return_value = {"overflow": "auto"}

        assert dom_utils.get_overflow(context) == "auto"
        context.execute.assert_called_once_with(snippets.GET_ELEMENT_STYLE_PROPERTIES, None, ["overflow"])

    def test_set_overflow_returns_original_and_waits(self, context: MagicMock) -> None:
        context.execute.return_value = {"overflow": "scroll"}

        with patch("lookout.sdk.dom_utils.time") as mock_time:
            original = dom_utils.set_overflow(context, "hidden")

        assert original == "scroll"
        mock_time.sleep.assert_called_once_with(0.2)
        context.execute.assert_called_once_with(snippets.SET_ELEMENT_STYLE_PROPERTIES, None, {"overflow": "hidden"})

    def test_set_overflow_failure_is_wrapped(self, context: MagicMock) -> None:
        context.execute.side_effect = DriverOperationError("detached")

        with patch("lookout.sdk.dom_utils.time") as mock_time:
            with pytest.raises(DriverOperationError, match="Failed to set overflow"):
                dom_utils.set_overflow(context, "hidden")

        mock_time.sleep.assert_not_called()


class TestFrameInfo:
    """Tests for context and child frame information."""

    def test_context_info_of_nested_frame(self, context: MagicMock) -> None:
        context.execute.return_value = {
            "selector": "html > body:nth-of-type(1) > iframe:nth-of-type(2)",
            "isRoot": False,
            "isCORS": False,
        }

        info = dom_utils.get_context_info(context)

        assert info == ContextInfo(
            selector="html > body:nth-of-type(1) > iframe:nth-of-type(2)", is_root=False, is_cors=False
        )
        context.execute.assert_called_once_with(snippets.GET_CONTEXT_INFO)

    def test_context_info_of_root_has_no_selector(self, context: MagicMock) -> None:
        context.execute.return_value = {"selector": None, "isRoot": True, "isCORS": False}

        info = dom_utils.get_context_info(context)

        assert info.is_root
        assert info.selector is None

    def test_child_frames_info(self, context: MagicMock) -> None:
        context.execute.return_value = [
            {"selector": "html > body:nth-of-type(1) > iframe:nth-of-type(1)", "isCORS": False, "src": "/a.html"},
            {"selector": "html > body:nth-of-type(1) > iframe:nth-of-type(2)", "isCORS": True, "src": None},
        ]

        frames = dom_utils.get_child_frames_info(context)

        assert frames == [
            ChildFrameInfo(selector="html > body:nth-of-type(1) > iframe:nth-of-type(1)", is_cors=False, src="/a.html"),
            ChildFrameInfo(selector="html > body:nth-of-type(1) > iframe:nth-of-type(2)", is_cors=True),
        ]

    def test_no_child_frames(self, context: MagicMock) -> None:
        context.execute.return_value = []
        assert dom_utils.get_child_frames_info(context) == []


class TestPageMarker:
    """Tests for drawing and removing the viewport marker."""

    def test_add_page_marker(self, context: MagicMock) -> None:
        context.execute.return_value = {"offset": 1, "size": 3, "mask": [0, 1, 0, 1]}

        marker = dom_utils.add_page_marker(context)

        assert marker == PageMarker(offset=1, size=3, mask=[0, 1, 0, 1])
        context.execute.assert_called_once_with(snippets.ADD_PAGE_MARKER)

    def test_cleanup_page_marker(self, context: MagicMock) -> None:
        dom_utils.cleanup_page_marker(context)
        context.execute.assert_called_once_with(snippets.CLEANUP_PAGE_MARKER)


class TestCaret:
    """Tests for best-effort blur and focus."""

    def test_blur_failure_is_reported_not_raised(self, context: MagicMock) -> None:
        context.execute.side_effect = DriverOperationError("detached")

        result = dom_utils.blur_element(context)

        assert not result.ok
        assert result.value is None
        assert isinstance(result.error, DriverOperationError)

    def test_focus_success(self, context: MagicMock) -> None:
        context.execute.return_value = None
        element = Element(context, "input")

        result = dom_utils.focus_element(context, element)

        assert result.ok
        context.execute.assert_called_once_with(snippets.FOCUS_ELEMENT, element)
