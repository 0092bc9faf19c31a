"""
chainstatsd - process wide client registry

A client created with ``globalize`` enabled registers itself here so code that
has no reference to it can still report metrics through ``get_global_client``.
Registration happens once per process: registering the same client again is a
no-op, registering a different one raises ClientAlreadyRegisteredError until
``clear_global_client`` is called.

Copyright (c) 2024 Aiven Ltd
See LICENSE for details
"""
import logging
import threading

from chainstatsd.errors import ClientAlreadyRegisteredError

LOG = logging.getLogger(__name__)

_lock = threading.Lock()
_global_client = None


def register_global_client(client):
    global _global_client  # pylint: disable=global-statement
    with _lock:
        if _global_client is client:
            return client
        if _global_client is not None:
            raise ClientAlreadyRegisteredError("A global statsd client has already been registered")
        LOG.info("Registering global statsd client %r", client)
        _global_client = client
        return client


def get_global_client():
    return _global_client


def clear_global_client():
    global _global_client  # pylint: disable=global-statement
    with _lock:
        _global_client = None
