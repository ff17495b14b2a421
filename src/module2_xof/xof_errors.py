"""
Extendable-output hash error types for Module 2.
"""


class XOFError(Exception):
    """Base exception for Module 2 extendable-output hashing."""
    pass


class UnsupportedVariantError(XOFError):
    """Raised when the requested XOF variant is not available."""
    pass


class XOFStateError(XOFError):
    """Raised when data is absorbed after output has been squeezed."""
    pass
