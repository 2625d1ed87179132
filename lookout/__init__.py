"""
lookout

Coordinates a test-automation driver with a remote browsing context:
chunked poll-script execution, region visibility across nested frames,
and exact viewport sizing.
"""

from lookout.data_models.execution import PollOptions, PollScripts, ScriptDescriptor
from lookout.data_models.geometry import Location, RectangleSize, Region
from lookout.sdk.poll_executor import execute_poll_script
from lookout.sdk.viewport import get_viewport_size, set_viewport_size
from lookout.sdk.visibility import ensure_region_visible

__all__ = [
    "Location",
    "PollOptions",
    "PollScripts",
    "RectangleSize",
    "Region",
    "ScriptDescriptor",
    "ensure_region_visible",
    "execute_poll_script",
    "get_viewport_size",
    "set_viewport_size",
]
