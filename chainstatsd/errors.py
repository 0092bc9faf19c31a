"""
chainstatsd - exception classes

Copyright (c) 2024 Aiven Ltd
See LICENSE for details
"""


class Error(Exception):
    """Generic chainstatsd exception"""


class InvalidConfigurationError(Error):
    """Invalid configuration"""


class ClientAlreadyRegisteredError(Error):
    """A different client has already been registered globally"""
