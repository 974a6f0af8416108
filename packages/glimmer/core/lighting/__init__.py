"""Light emission profiles and their time-varying range."""

from glimmer.core.lighting.radiance import (
    MIN_SERIALIZED_LENGTH,
    PHASE_SCALE,
    SERIALIZED_LENGTH,
    WRAP_MASK,
    Radiance,
    deserialize,
    now_millis,
    phase_of,
    serialize,
)
from glimmer.core.lighting.sway import (
    sway_randomized,
    sway_randomized_array,
    sway_tight,
    sway_tight_array,
)

__all__ = [
    "Radiance",
    "serialize",
    "deserialize",
    "phase_of",
    "now_millis",
    "PHASE_SCALE",
    "WRAP_MASK",
    "SERIALIZED_LENGTH",
    "MIN_SERIALIZED_LENGTH",
    "sway_randomized",
    "sway_tight",
    "sway_randomized_array",
    "sway_tight_array",
]
