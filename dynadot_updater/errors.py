"""Errors raised during an update run."""


class UpdaterError(Exception):
    """Base class for update run failures."""


class IPResolutionError(UpdaterError):
    """The public IP could not be determined."""


class FetchError(UpdaterError):
    """Reading the current records from the registrar failed."""


class PushError(UpdaterError):
    """Writing the record set to the registrar failed."""
