"""
lookout/utils/exceptions.py

Custom exceptions for the project.
"""

from typing import Any


class LookoutError(Exception):
    """
    Base class for all errors raised by lookout.
    """
    pass


class DriverOperationError(LookoutError):
    """
    Exception raised when a call against the remote browsing context fails:
    a script threw, the driver replied with an error, or a value could not be extracted.
    """
    pass


class RemoteExecutionError(LookoutError):
    """
    Exception raised when a poll script reports status ERROR.
    """

    def __init__(self, remote_error: Any) -> None:
        self.remote_error = remote_error
        super().__init__(f"Error during execute poll script: '{remote_error}'")


class MalformedResponseError(LookoutError):
    """
    Exception raised when a poll script response is not a valid JSON envelope.
    Keeps the payload length and both ends of the payload for diagnosing truncated transport.
    """

    def __init__(self, payload: str, reason: str) -> None:
        self.payload_length = len(payload)
        self.first_chars = payload[:100]
        self.last_chars = payload[-100:]
        super().__init__(
            f"Response is not a valid JSON string. length: {self.payload_length}, "
            f"first 100 chars: \"{self.first_chars}\", last 100 chars: \"{self.last_chars}\". "
            f"error: {reason}"
        )


class PollTimeoutError(LookoutError, TimeoutError):
    """
    Exception raised when a poll script does not reach a terminal state within its execution timeout.
    """
    pass


class ViewportResizeError(LookoutError):
    """
    Exception raised when the viewport could not be brought to the required size.
    """

    def __init__(self, required: Any, actual: Any) -> None:
        self.required = required
        self.actual = actual
        super().__init__(
            f"Failed to set viewport size! required={required}, actual={actual}"
        )
