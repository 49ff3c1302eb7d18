class LootError(Exception):
    """Base class for every error raised by lootr."""


class NotFound(LootError, KeyError):
    """A path does not lead to an existing branch."""

    def __init__(self, path: str, segment: str | None = None):
        self.path = path
        self.segment = segment
        if segment is None or segment == path:
            message = f"Branch not found: '{path}'"
        else:
            message = f"Branch not found: '{segment}' (in path '{path}')"
        super().__init__(message)

    def __str__(self):
        # KeyError quotes its argument, keep the plain message
        return self.args[0]


class ConfigError(LootError, ValueError):
    """A drop spec, tree or pipeline was configured with invalid values."""
