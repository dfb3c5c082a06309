"""Utility exports for the ballsville package."""

from .generate_id import generate_id
from .hasher import Hasher
from .logger import get_logger, set_level
from .normalize_string import normalize_string
from .now import Now
from .to_int import to_int

__all__ = [
    "Hasher",
    "Now",
    "generate_id",
    "get_logger",
    "normalize_string",
    "set_level",
    "to_int",
]
