"""
Exception types raised by the declaration generator.

Only the conditions listed here abort a run. Everything else degrades to a
best-effort output and is reported through the ``tern2dts`` logger.
"""


class Tern2DtsError(RuntimeError):
    """Base class for fatal generator errors."""


class ConfigError(Tern2DtsError):
    """Raised when a configuration file cannot be read or has the wrong shape."""


class FetchError(Tern2DtsError):
    """Raised when the source document cannot be retrieved."""


class InterfaceSampleError(Tern2DtsError):
    """
    Raised when prose announces a JSON sample ("on the following form:")
    that is missing or cannot be parsed.
    """

    def __init__(self, owner: str, member: str, reason: str) -> None:
        self.owner = owner
        self.member = member
        self.reason = reason
        super().__init__(
            f"{owner}.{member}: documentation announces a sample on the "
            f"following form, but {reason}"
        )


class AliasResolutionError(Tern2DtsError):
    """Raised when a global alias cannot be resolved against the declarations."""

    def __init__(self, alias: str, target: str, reason: str) -> None:
        self.alias = alias
        self.target = target
        self.reason = reason
        super().__init__(f"Cannot alias '{alias}' to '{target}': {reason}")
