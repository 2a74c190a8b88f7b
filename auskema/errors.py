"""Error hierarchy for fetching, parsing and caching schedules.

The CLI catches AuskemaError subclasses and reports them as warnings,
so a failed run still exits cleanly.
"""


class AuskemaError(Exception):
    """Base exception for all auskema errors."""

    pass


class FetchError(AuskemaError):
    """Network/transport failure or non-success HTTP status."""

    pass


class ParseError(AuskemaError):
    """Provider payload could not be turned into events."""

    pass


class NoScheduleFound(ParseError):
    """Unknown student id, or the payload contains no events."""

    pass


class UnknownProvider(AuskemaError):
    """No provider is registered under the configured name."""

    pass


class CacheReadError(AuskemaError):
    """Cache file is missing or corrupt. Treated as a cache miss."""

    pass


class CacheWriteError(AuskemaError):
    """Cache file or directory could not be written."""

    pass
