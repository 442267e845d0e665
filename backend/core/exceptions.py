class PlaybackError(ValueError):
    """Base class for embedded-playback errors."""

    code = "playback_error"


class UnknownProviderError(PlaybackError):
    code = "unknown_provider"


class InvalidRequestError(PlaybackError):
    code = "invalid_request"


class InvalidTransitionError(PlaybackError):
    code = "invalid_transition"


class ResolutionFailure(PlaybackError):
    """
    Episode metadata could not be fetched from the catalog service.
    """

    code = "resolution_failed"


class PersistenceFailure(PlaybackError):
    """
    A watch history write or read against the store failed.
    """

    code = "persistence_failed"
