from __future__ import annotations


class ParadoxError(Exception):
    """Base class for all errors raised while reading a Paradox file."""


class HeaderKeyError(ParadoxError, KeyError):
    """
    Requested header field is not part of the decoded header.
    Indicates a schema mismatch in calling code, not a damaged file.
    """

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message instead
        return str(self.args[0]) if self.args else ""


class DecodeError(ParadoxError):
    """Raw bytes could not be decoded (short read, bad offset, malformed layout)."""
