"""
chainstatsd - chainable metric builder

Copyright (c) 2024 Aiven Ltd
See LICENSE for details
"""
import dataclasses
from typing import TYPE_CHECKING, Any, Optional, Sequence, Union

from chainstatsd.common import SendCallback

if TYPE_CHECKING:
    from chainstatsd.client import StatsClient

StatName = Union[str, Sequence[str]]


@dataclasses.dataclass(frozen=True)
class Stat:
    """A metric waiting to be sent.

    Created by the metric constructors of StatsClient, e.g.::

        client.increment("logins").sample_rate(0.1).tags(["region:eu"]).send()

    ``sample_rate()`` and ``tags()`` return a modified copy so a Stat can be
    used as a template for several sends.
    """
    name: StatName
    value: Any
    metric_type: str
    rate: Optional[float] = None
    tag_list: Optional[Sequence[str]] = None
    client: "StatsClient" = dataclasses.field(default=None, compare=False, repr=False)

    def sample_rate(self, rate: float) -> "Stat":
        return dataclasses.replace(self, rate=rate)

    def tags(self, tags: Sequence[str]) -> "Stat":
        return dataclasses.replace(self, tag_list=tags)

    def send(self, callback: Optional[SendCallback] = None) -> None:
        self.client.send_all(self.name, self.value, self.metric_type, self.rate, self.tag_list, callback)
