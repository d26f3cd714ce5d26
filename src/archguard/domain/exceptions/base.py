"""Base exceptions for archguard domain."""


class ArchGuardError(Exception):
    """Root exception for all archguard errors.

    Allows catching all archguard-specific errors.
    """
