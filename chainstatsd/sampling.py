"""
chainstatsd - client side sampling

Copyright (c) 2024 Aiven Ltd
See LICENSE for details
"""
import random


def needs_rate_annotation(sample_rate) -> bool:
    return sample_rate is not None and sample_rate < 1


def should_send(sample_rate, rng=random.random) -> bool:
    """Decide whether a single emission goes out.  A missing rate or a rate
    of 1 or more always sends, otherwise a fresh draw from [0, 1) must be
    below the rate."""
    if not needs_rate_annotation(sample_rate):
        return True
    return rng() < sample_rate
