"""Shared pytest fixtures for glimmer tests."""

from __future__ import annotations

from collections.abc import Iterator
import logging
from pathlib import Path
import textwrap

import pytest

from glimmer.core.lighting import Radiance

# ============================================================================
# Path Fixtures
# ============================================================================


@pytest.fixture
def project_root() -> Path:
    """Get project root directory."""
    return Path(__file__).parent.parent


# ============================================================================
# Logging Fixtures
# ============================================================================


@pytest.fixture
def restore_logging() -> Iterator[None]:
    """Put the root logger back the way it was after a test reconfigures it."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)


# ============================================================================
# Radiance Fixtures
# ============================================================================


@pytest.fixture
def torch_light() -> Radiance:
    """Flickering torch with a fixed seed."""
    return Radiance(range=4.0, color="torch", flicker=1.5, seed=7)


@pytest.fixture
def beacon_light() -> Radiance:
    """Strobing white beacon with no flicker."""
    return Radiance(range=4.0, strobe=0.5, seed=1)


@pytest.fixture
def reference_light() -> Radiance:
    """Light whose serialized form is known exactly."""
    return Radiance(
        range=3.5,
        color=0x3F7F7FFF,
        flicker=0.2,
        strobe=0.0,
        delay=0.0,
        flare=0.1,
        seed=12345,
    )


# ============================================================================
# Config Fixtures
# ============================================================================


SAMPLE_CONFIG_YAML = textwrap.dedent(
    """\
    logging:
      level: DEBUG
    lights:
      torch:
        range: 4.0
        color: torch
        flicker: 1.5
        seed: 7
      lamp:
        range: 2.5
        color: "#FFE87C"
        flare: 0.5
        seed: -3
    chains:
      runway:
        length: 4
        range: 2.0
        color: "#FFFFFF"
        strobe: 1.0
    """
)


@pytest.fixture
def sample_config_path(tmp_path: Path) -> Path:
    """Write a YAML config with two lights and one chain."""
    path = tmp_path / "glimmer.yaml"
    path.write_text(SAMPLE_CONFIG_YAML, encoding="utf-8")
    return path
