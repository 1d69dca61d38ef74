#!/usr/bin/env python3
"""
Generate a block city from the command line.

Usage:
    blockcity --seed 42 --radius 10
    blockcity --seed 7 --radius 3 --ticks 600 --out city.msgpack
    blockcity --config city.json --per-block-rng
"""

from __future__ import annotations

import logging
import sys
from collections import Counter
from typing import Optional, Sequence

from blockcity.config import read_config
from blockcity.core.city_generator import generate_city
from blockcity.core.traffic import TrafficSimulator
from blockcity.protocol import ConfigurationError
from blockcity.utils.logging import ColoredLogger, setup_logging

LOGGER = logging.getLogger("blockcity.cli")


def main(argv: Optional[Sequence[str]] = None) -> int:
    try:
        config, args = read_config(argv)
    except ConfigurationError as e:
        setup_logging("ERROR")
        ColoredLogger.error(f"❌ Invalid configuration: {e}")
        return 2
    setup_logging(args.log_level)

    ColoredLogger.info(
        f"🏙️ Generating {config.blocks_per_side}x{config.blocks_per_side} blocks (seed {config.seed})"
    )
    try:
        layout = generate_city(config=config)
    except ConfigurationError as e:
        ColoredLogger.error(f"❌ Generation aborted: {e}")
        return 2

    zone_counts = Counter(zone.value for zone in layout.zones.values())
    for zone, count in sorted(zone_counts.items()):
        LOGGER.info("%-15s %d blocks", zone, count)
    for line in layout.stats.summary().splitlines():
        LOGGER.info(line)
    LOGGER.info("Layout digest: %s", layout.digest())

    if args.ticks > 0 and not config.simulate_cars:
        ColoredLogger.warning(f"⚠️ Traffic disabled, {len(layout.cars)} cars stay parked")
    if args.ticks > 0:
        sim = TrafficSimulator.from_layout(layout, enabled=config.simulate_cars)
        sim.run(args.ticks, args.dt)
        ColoredLogger.info(
            f"🚗 Simulated {args.ticks} ticks ({sim.elapsed:.2f}s) for {len(layout.cars)} cars",
            ColoredLogger.CYAN,
        )

    if args.out is not None:
        args.out.write_bytes(layout.pack())
        ColoredLogger.success(f"✅ Layout written to {args.out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
