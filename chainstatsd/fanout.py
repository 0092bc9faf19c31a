"""
chainstatsd - fan-out completion tracking

A metric sent to several names produces one datagram per name.  The
FanoutBarrier joins the per-datagram completions into a single result for the
caller: the first error wins and silences everything after it, otherwise the
caller gets the total number of bytes once every expected completion has been
seen.

Completions for names dropped by sampling never arrive, so a partially sampled
batch never reaches the expected count and the callback is not invoked.

Copyright (c) 2024 Aiven Ltd
See LICENSE for details
"""
from typing import Optional

from chainstatsd.common import SendCallback


class FanoutBarrier:
    def __init__(self, expected: int, callback: Optional[SendCallback] = None):
        self.expected = expected
        self.callback = callback
        self.completed = 0
        self.sent_bytes = 0
        self.called_back = False

    def on_send(self, error: Optional[BaseException], sent_bytes: Optional[int] = None) -> None:
        self.completed += 1
        if self.called_back or self.callback is None:
            return

        if error:
            self.called_back = True
            self.callback(error, None)
            return

        self.sent_bytes += sent_bytes or 0
        if self.completed == self.expected:
            self.called_back = True
            self.callback(None, self.sent_bytes)
