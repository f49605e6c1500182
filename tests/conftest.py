"""
Shared pytest fixtures: an in-memory transport and a stand-in control socket.
"""

import shutil
import socketserver
import tempfile
import threading
from pathlib import Path

import pytest

from airtraffic.core.exceptions import TransportError

STAT_RESPONSE = (
    "# pxname,svname,qcur,scur,status,weight,rate,check_status,\n"
    "web,FRONTEND,,3,OPEN,,5,,\n"
    "app,srv1,0,2,UP,100,4,L4OK,\n"
    "app,srv2,0,0,MAINT,50,0,,\n"
    "app,BACKEND,0,2,UP,150,4,,\n"
    "\n"
)


class RecordingTransport:
    """Transport double that records payloads and replays canned responses."""

    def __init__(self, responses=None, default: bytes = b"\n") -> None:
        self.responses = list(responses or [])
        self.default = default
        self.payloads: list[bytes] = []
        self.fail_with: Exception | None = None
        self.closed = False

    def request(self, payload: bytes) -> bytes:
        if self.closed:
            raise TransportError("transport is closed")
        self.payloads.append(payload)
        if self.fail_with is not None:
            raise self.fail_with
        if self.responses:
            return self.responses.pop(0)
        return self.default

    def close(self) -> None:
        self.closed = True

    @property
    def sent(self) -> list[str]:
        return [p.decode("utf-8") for p in self.payloads]


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


TRICKLE_INTERVAL = 0.1  # seconds
TRICKLE_BYTES = 15


class _ControlHandler(socketserver.BaseRequestHandler):
    def handle(self) -> None:
        server = self.server
        server.connections += 1
        data = b""
        while b";" not in data:
            chunk = self.request.recv(1024)
            if not chunk:
                return
            data += chunk
        command = data.split(b";", 1)[0].decode("utf-8")
        server.commands.append(command)
        if server.stall.is_set():
            server.release.wait(5)
            return
        if server.trickle.is_set():
            # one byte per interval for TRICKLE_BYTES intervals, then end of stream
            for _ in range(TRICKLE_BYTES):
                try:
                    self.request.sendall(b"x")
                except OSError:
                    return
                if server.release.wait(TRICKLE_INTERVAL):
                    return
            return
        self.request.sendall(server.responses.get(command, "\n").encode("utf-8"))


class FakeControlServer(socketserver.ThreadingMixIn, socketserver.UnixStreamServer):
    """Answers one command per connection, then closes, like the proxy does."""

    daemon_threads = True

    def __init__(self, path: str) -> None:
        super().__init__(path, _ControlHandler)
        self.path = path
        self.responses: dict[str, str] = {}
        self.commands: list[str] = []
        self.connections = 0
        self.stall = threading.Event()
        self.trickle = threading.Event()
        self.release = threading.Event()


@pytest.fixture
def control_server():
    """Run a stand-in control socket on a short temporary path."""
    tmpdir = tempfile.mkdtemp(prefix="at")
    path = str(Path(tmpdir) / "admin.sock")
    server = FakeControlServer(path)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield server
    finally:
        server.release.set()
        server.shutdown()
        server.server_close()
        thread.join(timeout=2)
        shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def stat_response() -> str:
    return STAT_RESPONSE
