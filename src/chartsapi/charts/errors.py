"""Exceptions raised while refreshing and querying the chart directory."""


class FeedError(Exception):
    """A refresh attempt could not produce a new directory."""


class FeedDecodeError(FeedError):
    """The upstream document is malformed or missing mandatory fields."""


class FeedDateError(FeedDecodeError):
    """An effective date in the feed could not be parsed."""


class FeedNotYetEffectiveError(FeedError):
    """The feed declares an effective date that lies in the future."""


class CacheNotReadyError(RuntimeError):
    """No directory has been loaded yet."""


class StartupError(RuntimeError):
    """Neither the live cycle nor the fallback cycle could be loaded."""


class ClientInputError(ValueError):
    """Invalid query parameters supplied by the caller."""

    status_code = 400


class NoAirportSpecifiedError(ClientInputError):
    def __init__(self, message: str = "no airport specified"):
        super().__init__(message)


class InvalidGroupCodeError(ClientInputError):
    def __init__(self, message: str = "invalid grouping code"):
        super().__init__(message)
