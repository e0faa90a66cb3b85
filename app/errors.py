"""
Application error types. HTTP mapping lives in main's exception handlers.
"""


class Unauthorized(Exception):
    """Missing, invalid, expired or revoked credential. Always a bare 401."""


class ProviderError(Exception):
    """Google authorization code exchange or profile lookup failed."""

    def __init__(self, msg: str):
        self.msg = msg
        super().__init__(msg)


class StoreUnavailable(Exception):
    """The database could not complete an operation."""
