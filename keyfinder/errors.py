"""Exceptions raised during primary-key discovery."""


class KeyDiscoveryError(Exception):
    """Base class for key discovery failures."""


class QueryFailure(KeyDiscoveryError):
    """A catalog or probe query failed, or returned an unusable answer."""


class ClassificationFailure(KeyDiscoveryError):
    """A column's declared type cannot be mapped to a DataType."""
