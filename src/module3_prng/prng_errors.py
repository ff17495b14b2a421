"""
PRNG error types for Module 3.
"""


class PRNGError(Exception):
    """Base exception for Module 3 PRNG operations."""
    pass


class UnsupportedPRNGError(PRNGError):
    """Raised when a PRNG name is not 'shake' or 'hkdf'."""
    pass


class PRNGConfigurationError(PRNGError):
    """Raised when configuration is missing or cannot be loaded."""
    pass
