"""Configuration models for Glimmer."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from glimmer.core.color.palette import resolve_color
from glimmer.core.lighting.radiance import Radiance


def _check_color(value: str | int) -> str | int:
    """Fail at load time on colors that cannot be resolved."""
    resolve_color(value)
    return value


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = Field(default=False, description="Emit JSON lines instead of text")
    filename: str | None = Field(default=None, description="Log file path (None = stdout)")


class LightPreset(BaseModel):
    """A named light as written in a config file.

    Example:
        >>> preset = LightPreset(range=3.5, color="#FF9A3C", flicker=1.2)
        >>> preset.to_radiance().range
        3.5
    """

    range: float = Field(default=0.0, ge=0.0, description="Radius in cells")
    color: str | int = Field(
        default="white", description="Hex string, palette name or packed pattern"
    )
    flicker: float = Field(default=0.0, ge=0.0, description="Random fluctuation rate")
    strobe: float = Field(default=0.0, ge=0.0, description="Periodic fluctuation rate")
    delay: float = Field(default=0.0, description="Phase offset")
    flare: float = Field(default=0.0, ge=0.0, le=1.0, description="Minimum range fraction")
    seed: int | None = Field(default=None, description="Flicker seed (None = random)")

    model_config = ConfigDict(
        extra="forbid",  # Reject unknown fields
        frozen=True,
    )

    @field_validator("color")
    @classmethod
    def _validate_color(cls, value: str | int) -> str | int:
        return _check_color(value)

    def to_radiance(self) -> Radiance:
        """Build the Radiance this preset describes."""
        fields = self.model_dump(exclude={"seed"})
        if self.seed is not None:
            fields["seed"] = self.seed
        return Radiance(**fields)


class ChainPreset(BaseModel):
    """A named chain of lights pulsing in sequence."""

    length: int = Field(ge=1, description="Number of lights in the chain")
    range: float = Field(ge=0.0, description="Radius of every light, in cells")
    color: str | int = Field(default="white", description="Hex string, palette name or packed pattern")
    strobe: float = Field(default=1.0, gt=0.0, description="Pulse rate")

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("color")
    @classmethod
    def _validate_color(cls, value: str | int) -> str | int:
        return _check_color(value)

    def to_chain(self) -> list[Radiance]:
        """Build the chain this preset describes."""
        return Radiance.make_chain(self.length, self.range, self.color, self.strobe)


class AppConfig(BaseModel):
    """Application-level configuration."""

    model_config = ConfigDict(extra="ignore")

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    lights: dict[str, LightPreset] = Field(default_factory=dict)
    chains: dict[str, ChainPreset] = Field(default_factory=dict)

    def radiance(self, name: str) -> Radiance:
        """Build the named light preset.

        Raises:
            KeyError: If no light preset has that name
        """
        if name not in self.lights:
            raise KeyError(f"Unknown light preset: {name}")
        return self.lights[name].to_radiance()

    def chain(self, name: str) -> list[Radiance]:
        """Build the named chain preset.

        Raises:
            KeyError: If no chain preset has that name
        """
        if name not in self.chains:
            raise KeyError(f"Unknown chain preset: {name}")
        return self.chains[name].to_chain()
