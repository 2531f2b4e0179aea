"""Tests for the raw TCP transport."""

import socket

import pytest

from ledapplet.exceptions import BoardUnreachableError, TransportError
from ledapplet.protocol import SeparatorKind, build_create_applet
from ledapplet.transport import LOOPBACK, TcpTransport


@pytest.mark.integration
class TestTcpTransport:
    """Test connect, exchange and close against the fake board."""

    def test_not_connected_until_open(self, board):
        transport = TcpTransport(board.port)
        assert transport.host == LOOPBACK
        assert not transport.connected
        assert board.connections == 0

    def test_exchange(self, board):
        with TcpTransport(board.port) as transport:
            assert transport.connected
            code = transport.exchange(build_create_applet(1, SeparatorKind.SOLID).encode())

        assert code == 0
        assert not transport.connected
        assert board.commands[0].raw == b'{"opcode":"CreateApplet","app_num":1,"parameters":[1]}'

    def test_status_byte_is_raw_value(self, make_board):
        fake = make_board(replies=[255])
        with TcpTransport(fake.port) as transport:
            assert transport.exchange(build_create_applet(1, SeparatorKind.SOLID).encode()) == 255

    def test_open_twice_keeps_connection(self, board):
        with TcpTransport(board.port) as transport:
            transport.open()
            transport.exchange(build_create_applet(1, SeparatorKind.SOLID).encode())
        assert board.connections == 1

    def test_close_is_idempotent(self, board):
        transport = TcpTransport(board.port)
        transport.open()
        transport.close()
        transport.close()
        assert not transport.connected

    def test_connect_refused(self):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
            sock.bind((LOOPBACK, 0))
            port = sock.getsockname()[1]

        with pytest.raises(BoardUnreachableError) as exc_info:
            TcpTransport(port).open()
        assert exc_info.value.host == LOOPBACK
        assert "Original error" in exc_info.value.technical_message

    def test_send_when_closed(self, board):
        transport = TcpTransport(board.port)
        with pytest.raises(TransportError) as exc_info:
            transport.send(b"{}")
        assert exc_info.value.operation == "send"

    def test_read_status_when_closed(self, board):
        with pytest.raises(TransportError, match="read status"):
            TcpTransport(board.port).read_status()

    def test_peer_closed(self, make_board):
        fake = make_board(hang_up_on=0)
        with TcpTransport(fake.port) as transport:
            with pytest.raises(TransportError) as exc_info:
                transport.exchange(build_create_applet(1, SeparatorKind.SOLID).encode())
        assert exc_info.value.operation == "read status"
        assert not exc_info.value.recoverable

    def test_read_timeout(self, make_board):
        fake = make_board(delays={0: 0.5})
        with TcpTransport(fake.port, timeout=0.1) as transport:
            with pytest.raises(TransportError) as exc_info:
                transport.exchange(build_create_applet(1, SeparatorKind.SOLID).encode())
        assert exc_info.value.original_error == "timed out"
