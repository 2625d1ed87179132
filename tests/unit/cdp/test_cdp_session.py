"""
tests/unit/cdp/test_cdp_session.py

Unit tests for CDPSession with a mocked WebSocket.
"""

import json
import threading
from collections.abc import Callable
from typing import Any
from unittest.mock import MagicMock, patch

import pytest
import websocket

from lookout.cdp.cdp_session import CDPSession
from lookout.utils.exceptions import DriverOperationError


@pytest.fixture
def ws() -> MagicMock:
    return MagicMock()


@pytest.fixture
def session(ws: MagicMock) -> CDPSession:
    """Session without a reader thread; replies are injected with handle_message."""
    return CDPSession(ws, timeout=0.05)


def reply_with(session: CDPSession, **reply: Any) -> Callable[[str], None]:
    """ws.send side effect answering every command immediately."""
    def send(raw: str) -> None:
        msg = json.loads(raw)
        session.handle_message({"id": msg["id"], **reply})
    return send


class TestSendAndWait:
    """Tests for CDPSession.send_and_wait."""

    def test_returns_result(self, session: CDPSession, ws: MagicMock) -> None:
        ws.send.side_effect = reply_with(session, result={"windowId": 3})

        result = session.send_and_wait("Browser.getWindowForTarget", {"a": 1})

        assert result == {"windowId": 3}
        sent = json.loads(ws.send.call_args.args[0])
        assert sent == {"id": 1, "method": "Browser.getWindowForTarget", "params": {"a": 1}}
        assert session.pending_responses == {}

    def test_error_reply_raises(self, session: CDPSession, ws: MagicMock) -> None:
        ws.send.side_effect = reply_with(session, error={"code": -32000, "message": "No target"})

        with pytest.raises(DriverOperationError, match="Browser.getWindowForTarget failed"):
            session.send_and_wait("Browser.getWindowForTarget")

    def test_missing_reply_times_out(self, session: CDPSession) -> None:
        with pytest.raises(DriverOperationError, match="timed out"):
            session.send_and_wait("Page.getFrameTree")
        assert session.pending_responses == {}

    def test_ids_increase(self, session: CDPSession, ws: MagicMock) -> None:
        assert session.send("Page.enable") == 1
        assert session.send("Runtime.enable") == 2


class TestConnectionLoss:
    """Tests for closed connections."""

    def test_send_on_closed_socket_raises_connection_error(self, session: CDPSession, ws: MagicMock) -> None:
        ws.send.side_effect = websocket.WebSocketConnectionClosedException("closed")

        with pytest.raises(ConnectionError):
            session.send_and_wait("Page.getFrameTree")

        assert session.connection_lost
        with pytest.raises(ConnectionError, match="closed"):
            session.send("Page.enable")

    def test_target_destroyed_marks_connection_lost(self, session: CDPSession) -> None:
        session.handle_message({"method": "Target.targetDestroyed", "params": {}})
        assert session.connection_lost

    def test_run_stops_when_socket_closes(self, session: CDPSession, ws: MagicMock) -> None:
        """Unparseable messages are skipped; a closed socket ends the loop."""
        ws.recv.side_effect = [
            "not json",
            json.dumps({"id": 99, "result": {}}),
            websocket.WebSocketConnectionClosedException("closed"),
        ]

        session.run()

        assert session.connection_lost
        assert ws.recv.call_count == 3

    def test_close(self, session: CDPSession, ws: MagicMock) -> None:
        session.close()

        ws.close.assert_called_once()
        assert session.connection_lost

    def test_close_joins_reader(self, session: CDPSession) -> None:
        reader = MagicMock()
        reader.is_alive.return_value = False
        session._reader = reader

        session.close()

        reader.join.assert_called_once_with(timeout=1)

    def test_reader_has_exited_when_close_returns(self, ws: MagicMock) -> None:
        """A reader blocked in recv wakes up on close and is gone afterwards."""
        closed = threading.Event()

        def blocking_recv() -> str:
            closed.wait(timeout=5)
            raise websocket.WebSocketConnectionClosedException("closed")

        ws.recv.side_effect = blocking_recv
        ws.close.side_effect = closed.set
        session = CDPSession(ws, timeout=0.5)
        session.start()

        session.close()

        assert not session._reader.is_alive()


class TestConnect:
    """Tests for CDPSession.connect."""

    def test_connect_opens_socket_and_starts_reader(self) -> None:
        ws = MagicMock()
        ws.recv.side_effect = websocket.WebSocketConnectionClosedException("closed")
        with patch("lookout.cdp.cdp_session.websocket.create_connection", return_value=ws) as create:
            session = CDPSession.connect("ws://127.0.0.1:9222/devtools/page/1")

        create.assert_called_once_with("ws://127.0.0.1:9222/devtools/page/1")
        session._reader.join(timeout=1)
        assert session.connection_lost
