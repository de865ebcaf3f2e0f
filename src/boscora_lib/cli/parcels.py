"""CLI for parcel generation."""

import argparse
import logging
import sys
from pathlib import Path

from rich.logging import RichHandler

from boscora_lib.config import ParcelConfig
from boscora_lib.core.exceptions import ValidationError
from boscora_lib.display import console, display_summary
from boscora_lib.parcels.pricing import FixedPrice, RandomPrice
from boscora_lib.runner import load_parcels, save_outputs


def build_parser() -> argparse.ArgumentParser:
    defaults = ParcelConfig()

    parser = argparse.ArgumentParser(
        description="Slice a reserve boundary into donatable parcels and write them as GeoJSON"
    )
    parser.add_argument(
        "--boundary",
        type=str,
        dest="boundary_path",
        default=str(Path.cwd() / "boundary.kml"),
        help="Vector file (KML, GeoJSON, ...) with the boundary polygon(s)",
    )
    parser.add_argument("--target", type=int, default=defaults.target_count, help="Parcel count")
    parser.add_argument(
        "--donated", type=int, default=defaults.donated_count, help="Parcels already donated"
    )
    price = parser.add_mutually_exclusive_group()
    price.add_argument("--price", type=float, help="Fixed price per parcel")
    price.add_argument(
        "--price-range",
        type=int,
        nargs=2,
        metavar=("LOW", "HIGH"),
        help="Random whole price per parcel in [LOW, HIGH)",
    )
    parser.add_argument(
        "--shrink", type=float, default=defaults.shrink_factor, help="Refinement shrink factor"
    )
    parser.add_argument(
        "--max-attempts",
        type=int,
        default=defaults.max_attempts,
        help="Maximum refinement attempts",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--out", type=str, default=defaults.output_dir, help="Output directory")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv=None):
    """Parcel generation CLI entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )

    if not Path(args.boundary_path).exists():
        print(f"✖ Boundary file not found: {args.boundary_path}", file=sys.stderr)
        sys.exit(1)

    try:
        if args.price_range:
            policy = RandomPrice(*args.price_range)
        elif args.price is not None:
            policy = FixedPrice(args.price)
        else:
            policy = FixedPrice()

        cfg = ParcelConfig(
            target_count=args.target,
            donated_count=args.donated,
            price_policy=policy,
            shrink_factor=args.shrink,
            max_attempts=args.max_attempts,
            seed=args.seed,
            output_dir=args.out,
        )
    except ValidationError as e:
        print(f"✖ {e}", file=sys.stderr)
        sys.exit(1)

    run = load_parcels(args.boundary_path, cfg)
    if not run.parcels:
        print(f"✖ No parcels generated from {args.boundary_path}", file=sys.stderr)
        sys.exit(1)

    out = save_outputs(run, cfg.output_dir)
    display_summary(run.summary())
    print(f"✔ Parcels GeoJSON: {out}")


if __name__ == "__main__":
    main()
