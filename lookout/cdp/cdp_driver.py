"""
lookout/cdp/cdp_driver.py

Driver and browsing context implementations over the Chrome DevTools Protocol.

Contains:
- get_page_ws_url: Discover the WebSocket URL of a page target
- CDPDriver: Window rect and orientation through the Browser domain
- CDPContext: Script execution in an isolated world of a frame
"""

from __future__ import annotations

from typing import Any

import requests
from pydantic import BaseModel

from lookout.cdp.cdp_session import CDPSession
from lookout.config import Config
from lookout.data_models.geometry import Location, RectangleSize, Region
from lookout.sdk import snippets
from lookout.sdk.context import BrowsingContext
from lookout.sdk.driver import AbstractDriver
from lookout.sdk.element import Element
from lookout.utils.exceptions import DriverOperationError
from lookout.utils.logger import get_logger


logger = get_logger(name=__name__)

# isolated world our scripts run in, so page globals cannot interfere
WORLD_NAME = "lookout"


def get_page_ws_url(http_url: str) -> str:
    """
    Get the WebSocket debugger URL of the first page target.

    Args:
        http_url: DevTools HTTP endpoint, e.g. "http://127.0.0.1:9222".

    Raises:
        DriverOperationError: If the endpoint lists no page target.
    """
    resp = requests.get(f"{http_url}/json/list", timeout=5)
    resp.raise_for_status()
    for target in resp.json():
        if target.get("type") == "page" and target.get("webSocketDebuggerUrl"):
            return target["webSocketDebuggerUrl"]
    raise DriverOperationError(f"No page target found at {http_url}")


class CDPDriver(AbstractDriver):
    """Browser window control for a page target."""

    def __init__(self, session: CDPSession) -> None:
        self.session = session
        self._main_context: CDPContext | None = None

    @classmethod
    def connect(cls, http_url: str | None = None) -> CDPDriver:
        """Connect to the first page target of a browser started with remote debugging."""
        ws_url = get_page_ws_url(http_url or Config.CDP_HTTP_URL)
        return cls(CDPSession.connect(ws_url))

    @property
    def is_native(self) -> bool:
        return False

    @property
    def main_context(self) -> CDPContext:
        """The main frame's context, created on first use."""
        if self._main_context is None:
            self._main_context = CDPContext.create_main(self)
        return self._main_context

    def reset_contexts(self) -> None:
        """Forget the context tree; call after the page navigated."""
        if self._main_context is not None:
            self._main_context.discard_frames()
        self._main_context = None

    def _get_window(self) -> tuple[int, dict[str, Any]]:
        result = self.session.send_and_wait("Browser.getWindowForTarget")
        return result["windowId"], result.get("bounds", {})

    def get_window_rect(self) -> Region:
        _, bounds = self._get_window()
        return Region(
            left=bounds.get("left", 0),
            top=bounds.get("top", 0),
            width=bounds.get("width", 0),
            height=bounds.get("height", 0),
        )

    def set_window_rect(
        self,
        location: Location | None = None,
        size: RectangleSize | None = None,
    ) -> None:
        window_id, bounds = self._get_window()

        # maximized/minimized/fullscreen windows ignore explicit bounds
        if bounds.get("windowState", "normal") != "normal":
            self.session.send_and_wait(
                "Browser.setWindowBounds",
                {"windowId": window_id, "bounds": {"windowState": "normal"}},
            )

        new_bounds: dict[str, int] = {}
        if location is not None:
            new_bounds.update(left=round(location.x), top=round(location.y))
        if size is not None:
            new_bounds.update(width=round(size.width), height=round(size.height))
        if not new_bounds:
            return
        self.session.send_and_wait(
            "Browser.setWindowBounds",
            {"windowId": window_id, "bounds": new_bounds},
        )

    def get_orientation(self) -> str:
        return self.main_context.execute(snippets.GET_ORIENTATION)

    def close(self) -> None:
        self.reset_contexts()
        self.session.close()


class CDPContext(BrowsingContext):
    """A frame's isolated world, addressed by its execution context ID."""

    def __init__(
        self,
        driver: CDPDriver,
        execution_context_id: int,
        parent: CDPContext | None = None,
        frame_element: Element | None = None,
        scroll_root_element: Element | None = None,
    ) -> None:
        super().__init__(
            driver=driver,
            parent=parent,
            frame_element=frame_element,
            scroll_root_element=scroll_root_element,
        )
        self.execution_context_id = execution_context_id

    @property
    def session(self) -> CDPSession:
        return self.driver.session

    @staticmethod
    def _create_world(session: CDPSession, frame_id: str) -> int:
        result = session.send_and_wait(
            "Page.createIsolatedWorld",
            {"frameId": frame_id, "worldName": WORLD_NAME},
        )
        return result["executionContextId"]

    @classmethod
    def create_main(cls, driver: CDPDriver) -> CDPContext:
        tree = driver.session.send_and_wait("Page.getFrameTree")
        frame_id = tree["frameTree"]["frame"]["id"]
        return cls(driver, cls._create_world(driver.session, frame_id))

    def _create_frame_context(self, frame_element: Element) -> CDPContext:
        node = self.session.send_and_wait("DOM.describeNode", {"objectId": frame_element.handle})["node"]
        frame_id = node.get("frameId")
        if not frame_id:
            raise DriverOperationError(f"{frame_element} is not a frame element")
        return CDPContext(
            self.driver,
            self._create_world(self.session, frame_id),
            parent=self,
            frame_element=frame_element,
        )

    @staticmethod
    def _serialize_argument(arg: Any) -> dict[str, Any]:
        if isinstance(arg, Element):
            return {"objectId": arg.handle}
        if isinstance(arg, BaseModel):
            return {"value": arg.model_dump(mode="json")}
        return {"value": arg}

    def _call(self, script: str, args: tuple[Any, ...], return_by_value: bool) -> dict[str, Any]:
        result = self.session.send_and_wait("Runtime.callFunctionOn", {
            "functionDeclaration": script,
            "executionContextId": self.execution_context_id,
            "arguments": [self._serialize_argument(arg) for arg in args],
            "returnByValue": return_by_value,
            "awaitPromise": True,
        })
        details = result.get("exceptionDetails")
        if details:
            description = details.get("exception", {}).get("description") or details.get("text")
            raise DriverOperationError(f"Script execution failed: {description}")
        return result.get("result", {})

    def execute(self, script: str, *args: Any) -> Any:
        return self._call(script, args, return_by_value=True).get("value")

    def find_element(self, selector: str) -> Element | None:
        """Find the first element matching a CSS selector in this context."""
        remote = self._call(snippets.QUERY_SELECTOR, (selector,), return_by_value=False)
        if "objectId" not in remote:
            return None
        return Element(self, remote["objectId"])
