"""
chainstatsd - common types

Copyright (c) 2024 Aiven Ltd
See LICENSE for details
"""
import enum
from typing import Callable, Optional

# callback(error, sent_bytes)
SendCallback = Callable[[Optional[BaseException], Optional[int]], None]


class StrEnum(str, enum.Enum):
    def __str__(self):
        return str(self.value)


@enum.unique
class MetricType(StrEnum):
    timing = "ms"
    counter = "c"
    gauge = "g"
    set = "s"
    histogram = "h"
