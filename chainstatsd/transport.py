"""
chainstatsd - UDP transport

Copyright (c) 2024 Aiven Ltd
See LICENSE for details
"""
import logging
import socket
from typing import Callable, Optional

from chainstatsd.common import SendCallback

LOG = logging.getLogger(__name__)

ErrorHandler = Callable[[BaseException], None]


def resolve_host(host: str, port: int) -> str:
    """Resolve host to an IPv4 address once, falling back to the hostname"""
    try:
        addresses = socket.getaddrinfo(host, port, socket.AF_INET, socket.SOCK_DGRAM)
    except OSError as ex:
        LOG.warning("Could not resolve statsd host %r, using it unresolved: %r", host, ex)
        return host
    address = addresses[0][4][0]
    LOG.debug("Resolved statsd host %r to %r", host, address)
    return address


class UdpTransport:
    def __init__(
        self,
        host: str = "localhost",
        port: int = 8125,
        *,
        mock: bool = False,
        dns_cache: bool = False,
        on_error: Optional[ErrorHandler] = None,
    ):
        self.host = host
        self.port = port
        self.mock = mock
        self.on_error = on_error or self._log_error
        self._socket = None
        if mock:
            return
        if dns_cache:
            self.host = resolve_host(host, port)
        self._socket = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)

    def __enter__(self) -> "UdpTransport":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _log_error(self, error: BaseException) -> None:
        LOG.warning("Failed to send statsd datagram to %s:%s: %r", self.host, self.port, error)

    def send(self, payload: bytes, callback: Optional[SendCallback] = None) -> None:
        """Send one datagram and report the outcome exactly once through callback"""
        if self.mock:
            if callback is not None:
                callback(None, 0)
            return

        try:
            if self._socket is None:
                raise OSError("statsd transport is closed")
            sent_bytes = self._socket.sendto(payload, (self.host, self.port))
        except OSError as ex:
            if callback is not None:
                callback(ex, None)
            else:
                self.on_error(ex)
            return

        if callback is not None:
            callback(None, sent_bytes)

    def close(self) -> None:
        if self._socket is not None:
            self._socket.close()
            self._socket = None
