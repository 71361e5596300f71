"""Exception hierarchy raised by the engine and its I/O adapters."""

from __future__ import annotations


class NetworkError(RuntimeError):
    """Base class for every failure surfaced by SynapseNet."""


class StructuralError(NetworkError):
    """Raised when layers cannot be assembled into a valid network."""


class PreconditionError(NetworkError):
    """Raised when a session is missing state required to start training."""


class NetworkIOError(NetworkError):
    """Raised when a collaborator cannot reach a file or folder."""


class ConfigNotFoundError(NetworkIOError):
    """Raised for a configuration path that does not exist."""


class DatasetNotFoundError(NetworkIOError):
    """Raised for a dataset folder that does not exist."""


class ParseError(NetworkError, ValueError):
    """Raised when a configuration document is malformed."""


__all__ = [
    "ConfigNotFoundError",
    "DatasetNotFoundError",
    "NetworkError",
    "NetworkIOError",
    "ParseError",
    "PreconditionError",
    "StructuralError",
]
