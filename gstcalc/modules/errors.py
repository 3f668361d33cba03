class InvalidArgumentError(ValueError):
    """Raised when a caller violates the documented input contract."""
