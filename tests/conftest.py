"""Pytest fixtures for tests."""

import json
import socket
import threading
import time
from dataclasses import dataclass, field
from typing import Optional

import pytest

from ledapplet.protocol import REVISION_V2, Command, Opcode, ProtocolRevision, StatusCode


@dataclass
class ReceivedCommand:
    """One command as seen by the fake board."""

    connection: int
    raw: bytes
    command: Command
    received_at: float
    replied_at: Optional[float] = None
    reply: Optional[int] = None


@dataclass
class FakeBoard:
    """
    Loopback TCP stand-in for the board-control process.

    Replies come from `replies` (one byte per command, in arrival order) while
    it has entries. After that the board behaves like real firmware: it tracks
    which connection created which applet and answers with the revision's
    status bytes. A scripted success for CreateApplet still grants ownership.
    """

    revision: ProtocolRevision = REVISION_V2
    replies: list[int] = field(default_factory=list)
    delays: dict[int, float] = field(default_factory=dict)
    hang_up_on: Optional[int] = None

    def __post_init__(self):
        self.commands: list[ReceivedCommand] = []
        self.connections = 0
        self.bytes_received = 0
        self._owners: dict[int, int] = {}
        self._lock = threading.Lock()
        self._running = False
        self._threads: list[threading.Thread] = []
        self._listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self._listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        self._listener.bind(("127.0.0.1", 0))
        self._listener.listen()
        self._listener.settimeout(0.05)
        self.port = self._listener.getsockname()[1]

    def start(self) -> "FakeBoard":
        self._running = True
        thread = threading.Thread(target=self._accept_loop, daemon=True)
        thread.start()
        self._threads.append(thread)
        return self

    def stop(self) -> None:
        self._running = False
        for thread in list(self._threads):
            thread.join(timeout=1.0)
        self._listener.close()

    def wait_for_commands(self, count: int, timeout: float = 2.0) -> None:
        deadline = time.monotonic() + timeout
        while len(self.commands) < count and time.monotonic() < deadline:
            time.sleep(0.01)

    def parameters(self, opcode: Opcode) -> list[list[int]]:
        """Parameter lists of every received command with the given opcode."""
        return [r.command.parameters for r in self.commands if r.command.opcode is opcode]

    def _code(self, status: StatusCode) -> int:
        return self.revision.code_for(status)

    def _accept_loop(self) -> None:
        while self._running:
            try:
                conn, _ = self._listener.accept()
            except socket.timeout:
                continue
            except OSError:
                return
            with self._lock:
                self.connections += 1
                conn_id = self.connections
            thread = threading.Thread(target=self._serve, args=(conn, conn_id), daemon=True)
            thread.start()
            self._threads.append(thread)

    def _serve(self, conn: socket.socket, conn_id: int) -> None:
        decoder = json.JSONDecoder()
        buffer = b""
        pending_since = None
        conn.settimeout(0.05)
        try:
            while self._running:
                try:
                    chunk = conn.recv(4096)
                except socket.timeout:
                    continue
                except OSError:
                    return
                if not chunk:
                    return
                if not buffer:
                    pending_since = time.monotonic()
                buffer += chunk
                with self._lock:
                    self.bytes_received += len(chunk)

                while buffer:
                    text = buffer.decode("utf-8")
                    try:
                        obj, end = decoder.raw_decode(text)
                    except json.JSONDecodeError:
                        break
                    raw = text[:end].encode("utf-8")
                    buffer = text[end:].encode("utf-8")
                    record = ReceivedCommand(
                        connection=conn_id,
                        raw=raw,
                        command=Command.model_validate(obj),
                        received_at=pending_since,
                    )
                    pending_since = time.monotonic() if buffer else None
                    if not self._handle(conn, conn_id, record):
                        return
        finally:
            with self._lock:
                for app_num in [a for a, owner in self._owners.items() if owner == conn_id]:
                    del self._owners[app_num]
            conn.close()

    def _handle(self, conn: socket.socket, conn_id: int, record: ReceivedCommand) -> bool:
        with self._lock:
            index = len(self.commands)
            self.commands.append(record)

        if self.hang_up_on == index:
            return False

        if index in self.delays:
            time.sleep(self.delays[index])

        if self.replies:
            reply = self.replies.pop(0)
            if reply == self._code(StatusCode.SUCCESS) and record.command.opcode is Opcode.CREATE_APPLET:
                with self._lock:
                    self._owners[record.command.app_num] = conn_id
        else:
            reply = self._firmware_reply(conn_id, record.command)
        record.replied_at = time.monotonic()
        record.reply = reply
        try:
            conn.sendall(bytes([reply]))
        except OSError:
            return False
        return True

    def _firmware_reply(self, conn_id: int, command: Command) -> int:
        if not self.revision.is_valid_app_num(command.app_num):
            return self._code(StatusCode.APP_NUM_OUT_OF_RANGE)

        with self._lock:
            owner = self._owners.get(command.app_num)
            if command.opcode is Opcode.CREATE_APPLET:
                if owner is not None:
                    return self._code(StatusCode.APPLET_EXISTS)
                self._owners[command.app_num] = conn_id
                return self._code(StatusCode.SUCCESS)

        if owner != conn_id:
            return self._code(StatusCode.APPLET_NOT_OWNED)
        return self._code(StatusCode.SUCCESS)


@pytest.fixture
def board():
    """A running fake board with default firmware behaviour."""
    fake = FakeBoard().start()
    yield fake
    fake.stop()


@pytest.fixture
def make_board():
    """Factory for fake boards with scripted replies or delays."""
    boards = []

    def _make(**kwargs) -> FakeBoard:
        fake = FakeBoard(**kwargs).start()
        boards.append(fake)
        return fake

    yield _make
    for fake in boards:
        fake.stop()


@pytest.fixture
def incrementing_grid():
    """10x9 grid holding 1..90 in row-major order."""
    return [[row * 9 + col + 1 for col in range(9)] for row in range(10)]
