"""Exception hierarchy for Artisan Studio.

Messages on these exceptions are intended to be displayed directly to the user,
so they are written as sentences rather than diagnostics.
"""


class ArtisanError(Exception):
    """Base class for all Artisan Studio errors."""


# Capture


class CaptureUnavailableError(ArtisanError):
    """The capture source could not be acquired (missing device, denied permission)."""


class DeviceUnavailableError(CaptureUnavailableError):
    """A frame was requested from a source that was never successfully acquired."""


# Generation


class GenerationError(ArtisanError):
    """The generation service could not produce an image."""


class MissingCredentialError(GenerationError):
    """No usable access credential is configured."""


class InvalidCredentialError(GenerationError):
    """The access credential was rejected by the generation service."""


class EmptyResultError(GenerationError):
    """The service answered but returned no extractable image payload."""


class UnknownGenerationError(GenerationError):
    """Any other generation failure, forwarded with its original message."""


# Persistence


class PersistenceError(ArtisanError):
    """The gallery persistence medium failed."""


class PersistenceCorruptError(PersistenceError):
    """The persisted gallery could not be parsed or validated."""


class PersistenceWriteError(PersistenceError):
    """The gallery could not be written to the persistence medium."""
