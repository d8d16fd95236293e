"""
Transposed and Neo-Riemannian chord progressions.

Build a RunConfig, then walk it linearly (`generate`) or around the token
necklace (`circular`).
"""

from .config import RunConfig, load_run_config, run_config_from_dict
from .errors import (
    CardinalityMismatch,
    ChordTransformError,
    InvalidConfiguration,
    InvalidNote,
    InvalidOperator,
    UnknownQuality,
)
from .progression import ProgressionResult, ProgressionStep, circular, generate, run
from .tokens import TransformToken, parse_token

__all__ = [
    "RunConfig",
    "load_run_config",
    "run_config_from_dict",
    "generate",
    "circular",
    "run",
    "ProgressionResult",
    "ProgressionStep",
    "TransformToken",
    "parse_token",
    "ChordTransformError",
    "InvalidConfiguration",
    "InvalidNote",
    "UnknownQuality",
    "InvalidOperator",
    "CardinalityMismatch",
]
