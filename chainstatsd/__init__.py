"""
chainstatsd - chainable StatsD / DogStatsD client

Copyright (c) 2024 Aiven Ltd
See LICENSE for details
"""
from chainstatsd.client import StatsClient
from chainstatsd.common import MetricType
from chainstatsd.config import StatsDConfig
from chainstatsd.registry import get_global_client
from chainstatsd.stat import Stat

__all__ = ["MetricType", "Stat", "StatsClient", "StatsDConfig", "get_global_client"]
