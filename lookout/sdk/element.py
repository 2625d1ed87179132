"""
lookout/sdk/element.py

Handle to an element living in a remote browsing context.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from lookout.data_models.geometry import CoordinatesType, Region
from lookout.sdk import snippets

if TYPE_CHECKING:
    from lookout.sdk.context import BrowsingContext


class Element:
    """
    A remote element bound to the context it was found in.

    `handle` is whatever the backend uses to pass the element back into
    scripts (a CDP objectId for the CDP backend).
    """

    def __init__(self, context: BrowsingContext, handle: Any) -> None:
        self.context = context
        self.handle = handle

    def get_rect(self) -> Region:
        """Border-box rect relative to the element's context."""
        return self._rect(is_client=False)

    def get_client_rect(self) -> Region:
        """Client (padding-box) rect relative to the element's context."""
        return self._rect(is_client=True)

    def _rect(self, is_client: bool) -> Region:
        rect = self.context.execute(snippets.GET_ELEMENT_RECT, self, is_client)
        return Region(
            left=rect["x"],
            top=rect["y"],
            width=rect["width"],
            height=rect["height"],
            coordinates_type=CoordinatesType.CONTEXT_RELATIVE,
        )

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Element) and other.handle == self.handle

    def __hash__(self) -> int:
        return hash(self.handle)

    def __repr__(self) -> str:
        return f"Element(handle={self.handle!r})"
