"""
Key derivation error types for Module 1.
"""


class KDFError(Exception):
    """Base exception for Module 1 key derivation operations."""
    pass


class OutputTooLargeError(KDFError):
    """Raised when HKDF-Expand would need more than 255 blocks."""

    def __init__(self, message: str, requested_length: int = None,
                 num_blocks: int = None, max_length: int = None):
        super().__init__(message)
        self.requested_length = requested_length
        self.num_blocks = num_blocks
        self.max_length = max_length


class UnsupportedHashError(KDFError):
    """Raised when a hash name cannot be used for HMAC."""
    pass


class KDFConfigurationError(KDFError):
    """Raised when a keyed-hash backend is not recognised."""
    pass
