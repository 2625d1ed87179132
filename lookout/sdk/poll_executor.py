"""
lookout/sdk/poll_executor.py

Execution of remote scripts whose result may take several round trips.

The main script starts the work and replies with a JSON envelope
(see ExecutionResponse). While the envelope says WIP, the poll script is
called every `poll_timeout` seconds. SUCCESS_CHUNKED envelopes carry slices
of a JSON string that are concatenated in arrival order until `done`.
"""

from __future__ import annotations

import json
import time
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from lookout.data_models.execution import (
    ExecutionResponse,
    ExecutionStatus,
    PollOptions,
    PollScripts,
    ScriptDescriptor,
)
from lookout.utils.exceptions import MalformedResponseError, PollTimeoutError, RemoteExecutionError
from lookout.utils.logger import get_logger

if TYPE_CHECKING:
    from lookout.sdk.context import BrowsingContext


logger = get_logger(name=__name__)


def _deserialize(payload: Any) -> Any:
    """
    Parse a JSON string coming back from the remote context.

    Raises:
        MalformedResponseError: If the payload is not a valid JSON string.
    """
    if not isinstance(payload, str):
        raise MalformedResponseError(str(payload), f"expected a JSON string, got {type(payload).__name__}")
    try:
        return json.loads(payload)
    except json.JSONDecodeError as e:
        raise MalformedResponseError(payload, str(e)) from e


def _execute(context: BrowsingContext, descriptor: ScriptDescriptor) -> ExecutionResponse:
    payload = context.execute(descriptor.script, *descriptor.args)
    envelope = _deserialize(payload)
    try:
        return ExecutionResponse.model_validate(envelope)
    except ValidationError as e:
        raise MalformedResponseError(payload, str(e)) from e


def execute_poll_script(
    context: BrowsingContext,
    scripts: PollScripts,
    options: PollOptions | None = None,
) -> Any:
    """
    Run a poll-protocol script pair to a terminal state.

    The execution timer starts before the main script is invoked and is
    only checked between iterations; a remote call in flight is always
    awaited.

    Args:
        context: Context to execute the scripts in.
        scripts: The main and poll scripts.
        options: Timings; defaults come from Config.

    Returns:
        The deserialized result value.

    Raises:
        RemoteExecutionError: The script reported ERROR.
        MalformedResponseError: A response (or the reassembled chunks) was not valid JSON.
        PollTimeoutError: No terminal state within `execution_timeout`.
    """
    options = options or PollOptions()
    logger.debug("Executing poll script")
    deadline = time.monotonic() + options.execution_timeout

    response = _execute(context, scripts.main)
    chunks = ""
    while time.monotonic() < deadline:
        if response.status == ExecutionStatus.ERROR:
            raise RemoteExecutionError(response.error)
        elif response.status == ExecutionStatus.SUCCESS:
            return response.value
        elif response.status == ExecutionStatus.SUCCESS_CHUNKED:
            if not isinstance(response.value, str):
                raise MalformedResponseError(str(response.value), "chunk value is not a string")
            chunks += response.value
            if response.done:
                return _deserialize(chunks)
        elif response.status == ExecutionStatus.WIP:
            time.sleep(options.poll_timeout)

        logger.debug("Polling...")
        response = _execute(context, scripts.poll)

    raise PollTimeoutError(
        f"Poll script execution is timed out after {options.execution_timeout} seconds"
    )
