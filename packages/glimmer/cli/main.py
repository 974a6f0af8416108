"""Command-line interface for Glimmer.

Inspect packed colors and preview configured lights from a terminal.
"""

from __future__ import annotations

import argparse

from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from glimmer.core.color import bits_to_float, decode, encode, lerp
from glimmer.core.config.loader import configure_logging, load_app_config
from glimmer.core.config.models import AppConfig, LoggingConfig
from glimmer.core.lighting import Radiance
from glimmer.core.utils.logging import get_logger

console = Console()
logger = get_logger(__name__)


def _parse_channel(text: str) -> int | float:
    """Channels with a decimal point are [0, 1] floats, anything else an int (0x allowed)."""
    if "." in text:
        return float(text)
    return int(text, 0)


def _parse_packed(text: str) -> int:
    return int(text, 0) & 0xFFFFFFFF


def _print_packed(label: str, packed: int) -> None:
    channels = decode(packed)
    console.print(f"[bold]{label}:[/bold] 0x{packed:08X}  (float view {bits_to_float(packed)!r})")
    console.print(
        f"   luma={channels.luma} warm={channels.warm} "
        f"mild={channels.mild} saturation={channels.saturation}"
    )


def _resolve_lights(config: AppConfig, name: str) -> list[Radiance]:
    if name in config.lights:
        return [config.radiance(name)]
    return config.chain(name)


def cmd_encode(args: argparse.Namespace, config: AppConfig) -> int:
    packed = encode(*(_parse_channel(c) for c in (args.luma, args.warm, args.mild, args.saturation)))
    _print_packed("Packed", packed)
    return 0


def cmd_decode(args: argparse.Namespace, config: AppConfig) -> int:
    _print_packed("Packed", _parse_packed(args.packed))
    return 0


def cmd_lerp(args: argparse.Namespace, config: AppConfig) -> int:
    packed = lerp(_parse_packed(args.start), _parse_packed(args.end), args.t)
    _print_packed(f"Lerp t={args.t}", packed)
    return 0


def cmd_preset(args: argparse.Namespace, config: AppConfig) -> int:
    lights = _resolve_lights(config, args.name)

    console.print(f"[bold]💡 {args.name}[/bold] ({len(lights)} light{'s' if len(lights) != 1 else ''})")
    for index, light in enumerate(lights):
        console.print(f"   [{index}] {light.serialize()}")

    table = Table(title=f"Range over time: {args.name}")
    table.add_column("ms", justify="right")
    for index in range(len(lights)):
        table.add_column(f"[{index}]", justify="right")

    times = [args.start + i * args.step for i in range(args.samples)]
    columns = [light.sample_ranges(times) for light in lights]
    for row, t in enumerate(times):
        table.add_row(str(t), *(f"{column[row]:.3f}" for column in columns))
    console.print(table)
    return 0


def cmd_parse(args: argparse.Namespace, config: AppConfig) -> int:
    radiance = Radiance.deserialize(args.text)
    if radiance is None:
        console.print("[red]ERROR: Serialized radiance is too short[/red]")
        return 1
    console.print(repr(radiance))
    _print_packed("Color", radiance.color)
    return 0


COMMANDS = {
    "encode": cmd_encode,
    "decode": cmd_decode,
    "lerp": cmd_lerp,
    "preset": cmd_preset,
    "parse": cmd_parse,
}


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for CLI."""
    p = argparse.ArgumentParser(
        prog="glimmer",
        description="Glimmer - packed YCwCm+Sat colors and flickering light radiance",
    )
    p.add_argument("--config", default=None, help="Path to config file (default: glimmer.yaml)")
    p.add_argument("--log-level", default=None, help="Override the configured log level")
    sub = p.add_subparsers(dest="cmd", required=True)

    enc = sub.add_parser("encode", help="Pack luma, warm, mild and saturation")
    for channel in ("luma", "warm", "mild", "saturation"):
        enc.add_argument(channel, help=f"{channel} as 0-255 or 0.0-1.0")

    dec = sub.add_parser("decode", help="Unpack a packed color (e.g. 0x3F7F7FFF)")
    dec.add_argument("packed")

    lrp = sub.add_parser("lerp", help="Interpolate two packed colors")
    lrp.add_argument("start")
    lrp.add_argument("end")
    lrp.add_argument("t", type=float)

    pre = sub.add_parser("preset", help="Preview a configured light or chain")
    pre.add_argument("name")
    pre.add_argument("--samples", type=int, default=8, help="Number of time samples")
    pre.add_argument("--step", type=int, default=100, help="Milliseconds between samples")
    pre.add_argument("--start", type=int, default=0, help="First sample time in milliseconds")

    prs = sub.add_parser("parse", help="Decode serialized radiance text")
    prs.add_argument("text")

    return p


def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI."""
    p = build_arg_parser()
    args = p.parse_args(argv)

    try:
        config = load_app_config(args.config)
        if args.log_level:
            logging_config = LoggingConfig.model_validate(
                {**config.logging.model_dump(), "level": args.log_level.upper()}
            )
            config = config.model_copy(update={"logging": logging_config})
        configure_logging(config)
        return COMMANDS[args.cmd](args, config)
    except (FileNotFoundError, KeyError, ValueError, ValidationError) as e:
        logger.debug("Command %s failed", args.cmd, exc_info=True)
        console.print(f"ERROR: {e}", style="red", markup=False)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
