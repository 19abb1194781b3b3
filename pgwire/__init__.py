"""PostgreSQL wire protocol messages and text-format value encoding."""

__version__ = "0.1.0"

__all__ = [
    "codec",
    "copy",
    "data",
    "extendedquery",
    "response",
    "simplequery",
    "terminate",
    "types",
]