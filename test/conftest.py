"""
chainstatsd: fixtures for tests

Copyright (c) 2024 Aiven Ltd
See LICENSE for details
"""
import selectors
import socket
from types import TracebackType
from typing import Callable, Iterator, List, Optional, Tuple, Type

import pytest

from chainstatsd import logutil, registry
from chainstatsd.common import SendCallback

logutil.configure_logging()


def port_is_listening(hostname: str, port: int, timeout: float = 0.5) -> bool:
    try:
        connection = socket.create_connection((hostname, port), timeout)
        connection.close()
        return True
    except socket.error:
        return False


@pytest.fixture(scope="session", name="get_available_port")
def fixture_get_available_port() -> Callable[[], int]:
    first_free_port = 30000

    def get_available_port():
        nonlocal first_free_port
        port = first_free_port
        while port < 40000:
            if not port_is_listening("localhost", port):
                first_free_port = port + 1
                return port
            port += 1
        raise RuntimeError("No available port")

    return get_available_port


class UdpServer:
    def __init__(self, port: int) -> None:
        self.port = port
        self.socket = socket.socket(family=socket.AF_INET, type=socket.SOCK_DGRAM)
        self.socket.settimeout(5.0)

    def __enter__(self) -> "UdpServer":
        self.socket.bind(("127.0.0.1", self.port))
        return self

    def __exit__(self, exc_type: Type, exc_val: BaseException, exc_tb: TracebackType) -> None:
        self.socket.close()

    def has_message(self) -> bool:
        selector = selectors.DefaultSelector()
        selector.register(self.socket, selectors.EVENT_READ)
        try:
            return len(selector.select(timeout=0.2)) > 0
        finally:
            selector.unregister(self.socket)

    def get_message(self) -> str:
        return self.socket.recv(2048).decode()


@pytest.fixture(name="udp_server")
def fixture_udp_server(get_available_port: Callable[[], int]) -> Iterator[UdpServer]:
    with UdpServer(port=get_available_port()) as udp_server:
        yield udp_server


class FakeTransport:
    """Transport that holds on to every datagram until the test completes it"""
    def __init__(self) -> None:
        self.pending: List[Tuple[bytes, Optional[SendCallback]]] = []
        self.closed = False

    @property
    def payloads(self) -> List[str]:
        return [payload.decode() for payload, _ in self.pending]

    def send(self, payload: bytes, callback: Optional[SendCallback] = None) -> None:
        self.pending.append((payload, callback))

    def complete(self, index: int, error: Optional[BaseException] = None, sent_bytes: Optional[int] = None) -> None:
        payload, callback = self.pending[index]
        if sent_bytes is None and error is None:
            sent_bytes = len(payload)
        if callback is not None:
            callback(error, sent_bytes)

    def close(self) -> None:
        self.closed = True


@pytest.fixture(name="fake_transport")
def fixture_fake_transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture(name="global_registry", autouse=True)
def fixture_global_registry() -> Iterator[None]:
    registry.clear_global_client()
    try:
        yield
    finally:
        registry.clear_global_client()


class CallbackRecorder:
    def __init__(self) -> None:
        self.calls: List[Tuple[Optional[BaseException], Optional[int]]] = []

    def __call__(self, error: Optional[BaseException], sent_bytes: Optional[int]) -> None:
        self.calls.append((error, sent_bytes))


@pytest.fixture(name="recorder")
def fixture_recorder() -> CallbackRecorder:
    return CallbackRecorder()
