"""Shared utilities for Glimmer."""

from glimmer.core.utils.json import read_json
from glimmer.core.utils.math import clamp, rotl32, smootherstep, smoothstep, to_int32

__all__ = [
    "clamp",
    "read_json",
    "rotl32",
    "smootherstep",
    "smoothstep",
    "to_int32",
]
