"""Command-line interface for island generation."""

import argparse
import logging
import sys
import time
from pathlib import Path


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for island generation."""
    parser = argparse.ArgumentParser(
        description="Generate a procedural island from a seed"
    )
    parser.add_argument(
        "--config", "-c", type=str, default=None, help="TOML config file (optional)"
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed (overrides config)"
    )
    parser.add_argument(
        "--output",
        "-o",
        type=str,
        default=None,
        help="Save the island to this .npz path (optional)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Verbose logging"
    )

    args = parser.parse_args(argv)

    # Configure logging
    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    # Import here to avoid slow startup for --help
    from .builder import build_island
    from .config import IslandConfig, load_config
    from .exceptions import IslandError
    from .persistence import save_island
    from .validation import validate_island

    try:
        config = load_config(Path(args.config)) if args.config else IslandConfig()
    except (FileNotFoundError, IslandError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.seed is not None:
        config = config.model_copy(update={"seed": args.seed})

    print(f"Generating island with seed {config.seed}")

    start_time = time.time()
    try:
        island = build_island(config)
    except IslandError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    gen_time = time.time() - start_time

    validation = validate_island(island, config)

    print()
    print(f"Generation complete in {gen_time:.1f}s")
    print(f"  border points:   {len(island.border)}")
    print(f"  interior points: {len(island.elevation):,}")
    if island.settlement is not None:
        print(f"  settlement:      {island.settlement.anchor}")
    print(f"  houses:          {len(island.houses)}")
    print(f"  shrine:          {'yes' if island.shrine else 'no'}")
    print(f"  satellites:      {len(island.satellites)}")
    if island.marker is not None:
        print(
            f"  castaway marker: {island.marker.location} "
            f"facing {island.marker.orientation:.1f} deg"
        )

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path = save_island(output_path, island, config)
        print(f"Saved to {output_path}")

    return 0 if validation.passed else 1


if __name__ == "__main__":
    sys.exit(main())
