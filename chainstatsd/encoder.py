"""
chainstatsd - datagram encoding

Datadog flavoured statsd line format:

  <prefix><name><suffix>:<value>|<type>[|@<sample_rate>][|#<tag1>,<tag2>]

  http://docs.datadoghq.com/guides/dogstatsd/#datagram-format

Nothing is escaped, names, values and tags must not contain ':', '|' or ','.

Copyright (c) 2024 Aiven Ltd
See LICENSE for details
"""
from typing import Optional, Sequence, Union

from chainstatsd.sampling import needs_rate_annotation

Number = Union[int, float]


def format_number(value) -> str:
    if isinstance(value, bool):
        return str(int(value))
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return repr(value)
    return str(value)


def encode_message(
    prefix: str,
    name: str,
    suffix: str,
    value: Union[Number, str],
    metric_type: str,
    sample_rate: Optional[Number] = None,
    tags: Optional[Sequence[str]] = None,
) -> str:
    parts = [prefix, name, suffix, ":", format_number(value), "|", str(metric_type)]
    if needs_rate_annotation(sample_rate):
        parts.append("|@" + format_number(sample_rate))
    # only real sequences count as tags, a bare string is ignored
    if isinstance(tags, (list, tuple)) and tags:
        parts.append("|#" + ",".join(tags))
    return "".join(parts)
