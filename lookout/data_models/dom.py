"""
lookout/data_models/dom.py

Data models for information read from a page's DOM.

Contains:
- ContextInfo: Where the current document sits in the frame hierarchy
- ChildFrameInfo: One frame element of the current document
- PageMarker: Geometry of the marker drawn over the viewport
"""

from pydantic import BaseModel, ConfigDict, Field


class ContextInfo(BaseModel):
    """Position of a browsing context's document in the frame hierarchy."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    selector: str | None = Field(
        default=None,
        description="CSS selector of the frame element in the parent document; None for the root or a CORS frame",
    )
    is_root: bool = Field(alias="isRoot")
    is_cors: bool = Field(alias="isCORS")


class ChildFrameInfo(BaseModel):
    """A frame element found in the current document."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    selector: str
    is_cors: bool = Field(alias="isCORS")
    src: str | None = None


class PageMarker(BaseModel):
    """
    A row of black and white cells drawn at a fixed viewport position.

    `offset` is the distance of the first cell from the viewport's top-left
    corner, `size` the side of one cell, both in CSS pixels. `mask` lists
    the cell colors left to right, 1 for black.
    """
    model_config = ConfigDict(frozen=True)

    offset: int
    size: int
    mask: list[int]
