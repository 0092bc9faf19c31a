"""
chainstatsd - logging formats and utility functions

Copyright (c) 2024 Aiven Ltd
See LICENSE for details
"""

import logging

LOG_FORMAT = "%(asctime)s\t%(name)s\t%(threadName)s\t%(levelname)s\t%(message)s"
LOG_FORMAT_SHORT = "%(levelname)s\t%(message)s"


def configure_logging(level=logging.DEBUG, short_log=False):
    logging.basicConfig(level=level, format=LOG_FORMAT_SHORT if short_log else LOG_FORMAT)
