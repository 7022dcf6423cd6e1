"""Error types for the stock indicator.

None of these are allowed to terminate the process. Each one is recovered
where it is caught: configuration problems fall back to defaults, fetch
problems turn rows into the unknown placeholder, dispatch problems drop the
current update cycle.
"""


class IndicatorError(Exception):
    """Base class for all indicator errors."""


class ConfigurationError(IndicatorError):
    """A stored or entered setting is invalid (bad interval, empty symbol list)."""


class FetchFailure(IndicatorError):
    """The whole quote batch could not be fetched (network error, timeout)."""


class PartialFetchFailure(IndicatorError):
    """A single symbol's quote is missing or corrupt."""

    def __init__(self, symbol, message):
        super().__init__(f"{symbol}: {message}")
        self.symbol = symbol


class UiDispatchFailure(IndicatorError):
    """The UI surface or its dispatch queue is closed, disposed or full."""
