import argparse
import logging
import sys
from typing import List, Optional

from hexworld import apply_modifications, export_world_json, generate_world, load_modifications
from hexworld.persistence import ModificationLoadError
from rivers import RiverGenerationConfig, generate_rivers, river_edges

logger = logging.getLogger("hexworld.cli")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Generate a seeded hex world and its river network."
    )
    parser.add_argument("--seed", type=int, default=42, help="World seed")
    parser.add_argument("--month", type=int, default=1, help="Month of the 14-month year (1-14)")
    parser.add_argument("--rivers", type=int, default=40, help="Number of rivers to aim for")
    parser.add_argument("--min-length", type=int, default=8, help="Minimum river length in tiles")
    parser.add_argument("--max-attempts", type=int, default=100, help="Mountain sources to try at most")
    parser.add_argument("--modifications", type=str, default=None, help="Replay saved terrain edits from this file")
    parser.add_argument("--out", type=str, default=None, help="Write the world snapshot to this JSON file")
    parser.add_argument("--debug", action="store_true", help="Check invariants after every stage")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    config = RiverGenerationConfig(min_length=args.min_length, max_attempts=args.max_attempts)
    grid = generate_world(args.seed, args.month, debug=args.debug)

    if args.modifications:
        try:
            mods = load_modifications(file_path=args.modifications)
        except ModificationLoadError as e:
            logger.error("Could not load terrain edits: %s", e)
            return 2
        logger.info("Replayed %d terrain edits", apply_modifications(grid, mods))

    rivers = generate_rivers(grid, config, args.rivers)

    print(f"World seed={grid.seed} month={grid.month} size={grid.width}x{grid.height} tiles={len(grid)}")
    for terrain, count in grid.terrain_histogram().items():
        print(f"  {terrain:<15} {count}")
    print(f"Rivers: {len(rivers)} ({len(river_edges(rivers))} edges)")
    for river in rivers:
        print(f"  {river.id}: {river.source} -> {river.mouth}, {river.length} tiles [{river.strategy}]")

    if args.out:
        try:
            export_world_json(grid, args.out, rivers)
        except OSError as e:
            logger.error("Failed to write %s: %s", args.out, e)
            return 3
        print(f"Wrote {args.out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
