"""Custom exceptions for island generation."""


class IslandError(Exception):
    """Base exception for island generation errors."""

    pass


class ConfigError(IslandError):
    """Raised when a configuration file cannot be loaded or validated."""

    pass


class NoSuitableSiteError(IslandError):
    """Raised when the bounded settlement search finds no flat site."""

    def __init__(self, attempts: int, best_steepness: float | None = None):
        self.attempts = attempts
        self.best_steepness = best_steepness
        if best_steepness is None:
            detail = "no candidate had enough neighbouring samples"
        else:
            detail = f"flattest candidate had steepness {best_steepness:.4f}"
        super().__init__(
            f"No suitable settlement site after {attempts} attempts ({detail})"
        )
