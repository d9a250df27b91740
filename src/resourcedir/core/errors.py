class ResourceDirError(Exception):
    """Base error for all user-facing resource directory exceptions."""


class ProjectNotInitializedError(ResourceDirError):
    """Raised when the .resourcedir data directory is missing."""


class ValidationError(ResourceDirError):
    """Raised when input fails validation."""


class PersistenceError(ResourceDirError):
    """Raised when creating or listing stored resources fails."""


class MetadataLookupError(ResourceDirError):
    """Raised when the external metadata lookup fails or returns unusable data."""


class ResourceNotFoundError(ResourceDirError):
    """Raised when a resource id does not refer to a known resource."""
