"""
lookout/cdp/cdp_session.py

CDP WebSocket session with synchronous request/response commands.
"""

import json
import threading
from typing import Any

import websocket

from lookout.config import Config
from lookout.utils.exceptions import DriverOperationError
from lookout.utils.logger import get_logger


logger = get_logger(name=__name__)


class CDPSession:
    """
    Manages a CDP WebSocket connection.

    A background reader thread (see `start`) receives messages and hands
    command replies to the caller blocked in `send_and_wait`.
    """

    def __init__(self, ws: websocket.WebSocket, timeout: float | None = None) -> None:
        self.ws = ws
        self.seq = 0
        self.timeout = Config.CDP_COMMAND_TIMEOUT if timeout is None else timeout

        # Connection state tracking
        self._connection_lost = False
        self._connection_lost_lock = threading.Lock()

        # Response tracking for synchronous commands
        self.pending_responses: dict[int, tuple[threading.Event, dict[str, Any]]] = {}
        self.response_lock = threading.Lock()
        self._seq_lock = threading.Lock()

        self._reader: threading.Thread | None = None

    @classmethod
    def connect(cls, ws_url: str, timeout: float | None = None) -> "CDPSession":
        """Open a WebSocket to `ws_url` and start reading from it."""
        logger.info(f"Connecting to {ws_url}")
        session = cls(websocket.create_connection(ws_url), timeout=timeout)
        session.start()
        return session

    @property
    def connection_lost(self) -> bool:
        return self._connection_lost

    def start(self) -> None:
        """Start the reader thread."""
        self._reader = threading.Thread(target=self.run, name="cdp-reader", daemon=True)
        self._reader.start()

    def _next_id(self) -> int:
        with self._seq_lock:
            self.seq += 1
            return self.seq

    def _send_raw(self, cmd_id: int, method: str, params: dict[str, Any] | None) -> None:
        if self._connection_lost:
            raise ConnectionError("WebSocket connection is closed")
        try:
            self.ws.send(json.dumps({"id": cmd_id, "method": method, "params": params or {}}))
        except (websocket.WebSocketConnectionClosedException, OSError, ConnectionError) as e:
            with self._connection_lost_lock:
                self._connection_lost = True
            raise ConnectionError(f"WebSocket connection lost: {e}") from e

    def send(self, method: str, params: dict[str, Any] | None = None) -> int:
        """Send CDP command without waiting and return its sequence ID."""
        cmd_id = self._next_id()
        self._send_raw(cmd_id, method, params)
        return cmd_id

    def send_and_wait(
        self,
        method: str,
        params: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> dict[str, Any]:
        """
        Send CDP command and wait for its reply.

        Raises:
            DriverOperationError: If the command failed or timed out.
            ConnectionError: If the WebSocket is gone.
        """
        timeout = self.timeout if timeout is None else timeout
        cmd_id = self._next_id()

        # register before sending so a fast reply cannot be missed
        event = threading.Event()
        response_data: dict[str, Any] = {"result": None, "error": None}
        with self.response_lock:
            self.pending_responses[cmd_id] = (event, response_data)

        try:
            self._send_raw(cmd_id, method, params)
        except ConnectionError:
            with self.response_lock:
                self.pending_responses.pop(cmd_id, None)
            raise

        if not event.wait(timeout):
            with self.response_lock:
                self.pending_responses.pop(cmd_id, None)
            raise DriverOperationError(f"CDP command {method} timed out after {timeout} seconds")

        if response_data["error"]:
            raise DriverOperationError(f"CDP command {method} failed: {response_data['error']}")

        return response_data["result"] or {}

    def handle_message(self, msg: dict[str, Any]) -> None:
        """Handle an incoming CDP message."""
        method = msg.get("method")
        if method == "Target.targetDestroyed" or method == "Inspector.detached":
            logger.info("Target was closed. Connection will be lost.")
            with self._connection_lost_lock:
                self._connection_lost = True
            self._fail_pending("target closed")
            return

        if "id" in msg:
            self._handle_command_reply(msg)

    def _handle_command_reply(self, msg: dict[str, Any]) -> bool:
        """Hand a command reply to its waiting caller."""
        cmd_id = msg.get("id")
        with self.response_lock:
            pending = self.pending_responses.pop(cmd_id, None)
        if pending is None:
            return False

        event, response_data = pending
        if "error" in msg:
            response_data["error"] = msg["error"]
        else:
            response_data["result"] = msg.get("result")
        event.set()
        return True

    def _fail_pending(self, reason: str) -> None:
        with self.response_lock:
            pending = list(self.pending_responses.values())
            self.pending_responses.clear()
        for event, response_data in pending:
            response_data["error"] = reason
            event.set()

    def run(self) -> None:
        """Message processing loop of the reader thread."""
        while not self._connection_lost:
            try:
                msg = json.loads(self.ws.recv())
                self.handle_message(msg)
            except (websocket.WebSocketConnectionClosedException, OSError, ConnectionError) as e:
                logger.info(f"Connection lost: {e}")
                with self._connection_lost_lock:
                    self._connection_lost = True
                self._fail_pending(f"connection lost: {e}")
                break
            except json.JSONDecodeError as e:
                logger.warning(f"Failed to parse message: {e}")
                continue

    def close(self) -> None:
        """Close the WebSocket and wait briefly for the reader thread to exit."""
        with self._connection_lost_lock:
            self._connection_lost = True
        self._fail_pending("session closed")
        try:
            self.ws.close()
        except (websocket.WebSocketException, OSError) as e:
            logger.debug(f"Error while closing WebSocket: {e}")
        reader = self._reader
        if reader is not None and reader is not threading.current_thread():
            reader.join(timeout=1)
            if reader.is_alive():
                logger.warning("CDP reader thread did not exit after close")
