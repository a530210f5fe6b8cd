"""Exceptions raised by the Deuce scoring library."""


class DeuceError(Exception):
    """Base class for every error raised by this package."""


class ServiceNotSetError(DeuceError, AssertionError):
    """Service state was read before a server was chosen."""


class InvalidRecordError(DeuceError, ValueError):
    """A persisted match record failed validation."""
