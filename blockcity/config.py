import argparse
import json
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional, Sequence, Tuple

from blockcity.constants import (
    CAR_DENSITY,
    CAR_SPEED,
    DEFAULT_GRID_RADIUS,
    DEFAULT_SEED,
    MAX_GRID_RADIUS,
    MAX_SEED,
    NOISE_SCALE,
    ZONE_THRESHOLDS,
)
from blockcity.protocol import ConfigurationError


@dataclass
class CityConfig:
    seed: int = DEFAULT_SEED
    grid_radius: int = DEFAULT_GRID_RADIUS
    car_density: float = CAR_DENSITY
    zone_thresholds: Tuple[float, float, float] = ZONE_THRESHOLDS
    noise_scale: float = NOISE_SCALE
    car_speed: float = CAR_SPEED
    simulate_cars: bool = True
    per_block_rng: bool = False

    @property
    def blocks_per_side(self) -> int:
        return 2 * self.grid_radius + 1

    def validate(self) -> None:
        if not 0 <= self.seed < MAX_SEED:
            raise ConfigurationError(f"seed must be in [0, 2**64), got {self.seed}")
        if not 1 <= self.grid_radius <= MAX_GRID_RADIUS:
            raise ConfigurationError(
                f"grid_radius must be in [1, {MAX_GRID_RADIUS}], got {self.grid_radius}"
            )
        if not 0.0 <= self.car_density <= 1.0:
            raise ConfigurationError(f"car_density must be in [0, 1], got {self.car_density}")
        thresholds = tuple(self.zone_thresholds)
        if len(thresholds) != 3:
            raise ConfigurationError("zone_thresholds needs exactly three values")
        if not 0.0 < thresholds[0] < thresholds[1] < thresholds[2] < 1.0:
            raise ConfigurationError(
                f"zone_thresholds must be strictly ascending inside (0, 1), got {thresholds}"
            )
        if self.noise_scale <= 0.0:
            raise ConfigurationError(f"noise_scale must be positive, got {self.noise_scale}")
        if self.car_speed < 0.0:
            raise ConfigurationError(f"car_speed must not be negative, got {self.car_speed}")

    @classmethod
    def from_json(cls, path: Path) -> "CityConfig":
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigurationError(f"Unknown config keys: {', '.join(sorted(unknown))}")
        if "zone_thresholds" in data:
            data["zone_thresholds"] = tuple(data["zone_thresholds"])
        return cls(**data)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="blockcity",
        description="Generate a procedural block city and simulate its traffic.",
    )
    parser.add_argument("--config", type=Path, help="JSON file with CityConfig fields")
    parser.add_argument("--seed", type=int, help=f"City seed (default {DEFAULT_SEED})")
    parser.add_argument(
        "--radius",
        type=int,
        dest="grid_radius",
        help=f"Grid radius; blocks span [-r, r] on both axes (default {DEFAULT_GRID_RADIUS})",
    )
    parser.add_argument("--car-density", type=float, help=f"Lane slot spawn threshold (default {CAR_DENSITY})")
    parser.add_argument("--noise-scale", type=float, help=f"Zoning noise scale (default {NOISE_SCALE})")
    parser.add_argument("--car-speed", type=float, help=f"Car speed in units/s (default {CAR_SPEED})")
    parser.add_argument(
        "--no-traffic",
        action="store_false",
        dest="simulate_cars",
        default=None,
        help="Generate cars but never move them",
    )
    parser.add_argument(
        "--per-block-rng",
        action="store_true",
        default=None,
        help="Give every block its own RNG stream derived from the seed",
    )
    parser.add_argument("--ticks", type=int, default=0, help="Traffic ticks to simulate after generation")
    parser.add_argument("--dt", type=float, default=1 / 60, help="Seconds per traffic tick")
    parser.add_argument("--out", type=Path, help="Write the packed layout (msgpack) to this file")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser


def read_config(argv: Optional[Sequence[str]] = None) -> Tuple[CityConfig, argparse.Namespace]:
    """Parse *argv*: JSON file values first, explicit flags on top."""
    args = build_parser().parse_args(argv)
    config = CityConfig.from_json(args.config) if args.config else CityConfig()
    for f in fields(CityConfig):
        value = getattr(args, f.name, None)
        if value is not None:
            setattr(config, f.name, value)
    config.validate()
    if args.dt < 0:
        raise ConfigurationError(f"--dt must not be negative, got {args.dt}")
    if args.ticks < 0:
        raise ConfigurationError(f"--ticks must not be negative, got {args.ticks}")
    return config, args
