from __future__ import annotations

from typing import Optional


class GistError(Exception):
    """Base class for every failure that aborts an upload."""


class ConfigError(GistError):
    """Missing or malformed credential/configuration."""


class InputError(GistError):
    """Standard input could not be read."""


class EmptyInputError(GistError):
    """None of the named files could be read."""


class TransportError(GistError):
    """The request could not be sent or the response could not be read."""


class RefusedError(GistError):
    """The service answered with something other than 201 Created."""

    def __init__(self, status: int, body: Optional[str], read_error: Optional[BaseException] = None):
        self.status = status
        self.body = body
        self.read_error = read_error
        if read_error is not None:
            detail = str(read_error)
        else:
            detail = body
        super().__init__(f"refused by github: body: {detail}")


class DecodeError(GistError):
    """A successful response carried a body we could not make sense of."""
