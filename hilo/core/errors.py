class HiloError(Exception):
    """Base class for engine and feed errors."""


class PendingPredictionError(HiloError):
    """A prediction is still waiting for its actual outcome."""


class FeedError(HiloError):
    """The upstream draw feed could not deliver a usable list."""
