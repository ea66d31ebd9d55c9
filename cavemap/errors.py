# cavemap/errors.py
"""Exception types raised by the generation stages."""


class CaveMapError(Exception):
    """Base class for every error raised by the cave mosaic generator."""


class InvalidConfig(CaveMapError, ValueError):
    """A parameter is out of range or an input is missing/empty."""


class InsufficientCandidates(CaveMapError, ValueError):
    """More unique samples were requested than the candidate pool holds."""

    def __init__(self, requested: int, available: int):
        self.requested = requested
        self.available = available
        super().__init__(
            f"Requested {requested} unique spots but only {available} candidates exist"
        )


__all__ = ["CaveMapError", "InvalidConfig", "InsufficientCandidates"]
