"""
lookout/data_models/execution.py

Data models for the poll-script protocol.

Contains:
- ExecutionStatus: Status values reported by a remote script
- ExecutionResponse: One JSON envelope returned by the main or poll script
- ScriptDescriptor: Script reference plus positional arguments
- PollScripts: The main/poll script pair
- PollOptions: Protocol timings
"""

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from lookout.config import Config


class ExecutionStatus(StrEnum):
    """Status of a remote script execution."""
    WIP = "WIP"                           # Still running, poll again later
    SUCCESS = "SUCCESS"                   # Result is in `value`
    SUCCESS_CHUNKED = "SUCCESS_CHUNKED"   # `value` is one chunk of a JSON string
    ERROR = "ERROR"                       # Failure description is in `error`


class ExecutionResponse(BaseModel):
    """
    Envelope returned by a poll-protocol script.

    `done` is only meaningful for SUCCESS_CHUNKED and marks the final chunk.
    """
    status: ExecutionStatus
    value: Any = None
    error: Any = None
    done: bool = False


class ScriptDescriptor(BaseModel):
    """An opaque script reference and its positional arguments."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    script: str
    args: list[Any] = Field(default_factory=list)


class PollScripts(BaseModel):
    """
    Script pair driving the protocol: `main` starts the work once,
    `poll` is invoked repeatedly until a terminal status.
    """
    main: ScriptDescriptor
    poll: ScriptDescriptor


class PollOptions(BaseModel):
    """Poll protocol timings, in seconds."""
    execution_timeout: float = Field(
        default_factory=lambda: Config.POLL_EXECUTION_TIMEOUT,
        description="Wall-clock budget for the whole execution, main call included"
    )
    poll_timeout: float = Field(
        default_factory=lambda: Config.POLL_INTERVAL,
        description="Sleep between a WIP response and the next poll"
    )
