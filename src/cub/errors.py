"""Domain errors for cub."""


class CubError(RuntimeError):
    """Raised when an update step cannot continue safely."""


class LockDataError(CubError):
    """Raised when the lock file does not have the expected structure."""
