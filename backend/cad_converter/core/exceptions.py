"""
Errors raised while driving a conversion.

Every kind ends up as the same 500 response; the classes only exist so the
logs say which stage gave up.
"""


class ConversionError(Exception):
    """Base class for pipeline failures."""


class PreconditionError(ConversionError):
    """The job or its specs are not in a state that can be converted."""


class CadServiceError(ConversionError):
    """The CAD service could not be reached or returned an unusable answer."""


class StorageError(ConversionError):
    """Uploading a model file or resolving its public URL failed."""
