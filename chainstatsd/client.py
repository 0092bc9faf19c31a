"""
chainstatsd - StatsD client

Every metric method returns a Stat which is sent with ``send()``, optionally
after setting a sample rate and Datadog style tags on it::

  client = StatsClient({"prefix": "app."})
  client.increment("logins").tags(["region:eu"]).send()
  client.timing(["db.query", "db.query.users"], 42).sample_rate(0.5).send(callback)

Metric names may be a single name or a list of names, in which case one
datagram is sent per name and ``callback(error, sent_bytes)`` is invoked once
for the whole list.

Copyright (c) 2024 Aiven Ltd
See LICENSE for details
"""
import logging
import time
from contextlib import contextmanager
from typing import Any, Dict, Optional, Sequence, Union

from chainstatsd import registry
from chainstatsd.common import MetricType, SendCallback
from chainstatsd.config import StatsDConfig, set_and_check_config_defaults
from chainstatsd.encoder import encode_message
from chainstatsd.errors import ClientAlreadyRegisteredError
from chainstatsd.fanout import FanoutBarrier
from chainstatsd.sampling import should_send
from chainstatsd.stat import Stat, StatName
from chainstatsd.transport import UdpTransport

LOG = logging.getLogger(__name__)


class StatsClient:
    def __init__(self, config: Union[Dict[str, Any], StatsDConfig, None] = None, *, transport=None, **overrides):
        if overrides:
            base = config.model_dump() if isinstance(config, StatsDConfig) else dict(config or {})
            base.update(overrides)
            config = base
        self.config = set_and_check_config_defaults(config)
        self.prefix = self.config.prefix
        self.suffix = self.config.suffix
        self.global_tags = list(self.config.global_tags)
        if transport is None:
            transport = UdpTransport(
                self.config.host, self.config.port, mock=self.config.mock, dns_cache=self.config.dns_cache
            )
        self.transport = transport
        LOG.debug("Created statsd client for %s:%s, mock: %r", self.config.host, self.config.port, self.config.mock)
        if self.config.globalize:
            try:
                registry.register_global_client(self)
            except ClientAlreadyRegisteredError:
                self.transport.close()
                raise

    def __repr__(self):
        return "<{} {}:{}>".format(self.__class__.__name__, self.config.host, self.config.port)

    def __enter__(self) -> "StatsClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @property
    def mock(self) -> bool:
        return self.config.mock

    def close(self) -> None:
        self.transport.close()

    def timing(self, stat: StatName, time_ms) -> Stat:
        return Stat(stat, time_ms, MetricType.timing, client=self)

    def increment(self, stat: StatName, value=None) -> Stat:
        return Stat(stat, value or 1, MetricType.counter, client=self)

    def decrement(self, stat: StatName, value=None) -> Stat:
        return Stat(stat, -(value or 1), MetricType.counter, client=self)

    def gauge(self, stat: StatName, value) -> Stat:
        return Stat(stat, value, MetricType.gauge, client=self)

    def histogram(self, stat: StatName, value) -> Stat:
        return Stat(stat, value, MetricType.histogram, client=self)

    def set(self, stat: StatName, value) -> Stat:
        return Stat(stat, value, MetricType.set, client=self)

    unique = set

    @contextmanager
    def timed(
        self,
        stat: StatName,
        sample_rate: Optional[float] = None,
        tags: Optional[Sequence[str]] = None,
        callback: Optional[SendCallback] = None,
    ):
        """Send the wall clock time spent in the block (or decorated function)
        in milliseconds, also when the block raises"""
        start = time.monotonic()
        try:
            yield
        finally:
            elapsed_ms = round((time.monotonic() - start) * 1000.0, 3)
            self.send_all(stat, elapsed_ms, MetricType.timing, sample_rate, tags, callback)

    def send_all(
        self,
        stat: StatName,
        value,
        metric_type: str,
        sample_rate: Optional[float] = None,
        tags: Optional[Sequence[str]] = None,
        callback: Optional[SendCallback] = None,
    ) -> None:
        if isinstance(stat, str):
            self.send(stat, value, metric_type, sample_rate, tags, callback)
            return

        names = list(stat)
        barrier = FanoutBarrier(len(names), callback)
        for name in names:
            self.send(name, value, metric_type, sample_rate, tags, barrier.on_send)

    def send(
        self,
        stat: str,
        value,
        metric_type: str,
        sample_rate: Optional[float] = None,
        tags: Optional[Sequence[str]] = None,
        callback: Optional[SendCallback] = None,
    ) -> None:
        if not should_send(sample_rate):
            # sampled out: nothing is sent and callback is not invoked
            return

        if self.global_tags:
            tags = self.global_tags + list(tags) if isinstance(tags, (list, tuple)) else self.global_tags
        message = encode_message(self.prefix, stat, self.suffix, value, metric_type, sample_rate, tags)
        self.transport.send(message.encode("utf-8"), callback)
