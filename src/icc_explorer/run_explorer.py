#!/usr/bin/env python3
"""Interactive item characteristic curve explorer.

Opens one window per IRT model family (1PL, 2PL, 3PL, 4PL) with sliders for
ability and item parameters. Figures and the sampled curves can also be
written to disk without opening any window.

Run with: icc-explorer --family all
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple

import matplotlib.pyplot as plt

from .config import ExplorerConfig
from .export import write_curve_table
from .families import build_families
from .model import make_theta_grid
from .plotting import Explorer, build_explorer, save_explorer

logger = logging.getLogger(__name__)

FAMILY_CHOICES = ["1PL", "2PL", "3PL", "4PL", "all"]


def parse_assignment(text: str) -> Tuple[str, float]:
    """Parse a NAME=VALUE parameter override."""
    name, sep, value = text.partition("=")
    name = name.strip()
    if not sep or not name:
        raise ValueError(f"Expected NAME=VALUE, got {text!r}")
    try:
        return name, float(value)
    except ValueError:
        raise ValueError(f"Value for {name!r} is not a number: {value!r}") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Explore IRT item characteristic curves")
    parser.add_argument('--family', type=str, default='all', choices=FAMILY_CHOICES,
                        help='Model family to show')
    parser.add_argument('--set', dest='overrides', action='append', default=[],
                        metavar='NAME=VALUE',
                        help='Initial parameter value, e.g. --set theta=1.5 (repeatable)')
    parser.add_argument('--lock', action='store_true',
                        help='Start with θ and b locked together')
    parser.add_argument('--save', type=str, default=None, metavar='DIR',
                        help='Save one PNG per family into DIR')
    parser.add_argument('--export-csv', type=str, default=None, metavar='PATH',
                        help='Write the sampled curves to a CSV file')
    parser.add_argument('--no-show', action='store_true',
                        help='Do not open interactive windows')
    parser.add_argument('--figsize', type=float, nargs=2, default=[7, 7],
                        help='Figure size (width height)')
    parser.add_argument('--dpi', type=int, default=150,
                        help='Output DPI')
    parser.add_argument('--verbose', action='store_true',
                        help='Log lock synchronisation and other debug output')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        overrides = [parse_assignment(text) for text in args.overrides]
    except ValueError as e:
        parser.error(str(e))

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.no_show:
        plt.switch_backend("agg")

    config = ExplorerConfig(figsize=tuple(args.figsize), dpi=args.dpi)
    families = build_families(config.upper_eps)
    grid = make_theta_grid(config.theta_min, config.theta_max, config.grid_size)
    keys = list(families) if args.family == "all" else [args.family]

    explorers: List[Explorer] = []
    for key in keys:
        explorer = build_explorer(families[key], grid, config)
        for name, value in overrides:
            if explorer.binding.family.has_param(name):
                explorer.binding.set_value(name, value)
        if args.lock and explorer.controls.toggles:
            # Goes through the checkbox so the widget shows the lock as enabled
            explorer.controls.toggles[0].set_active(0)
        explorers.append(explorer)

    known = {spec.id for explorer in explorers for spec in explorer.binding.family.params}
    for name, _ in overrides:
        if name not in known:
            logger.warning("Parameter %r is not used by %s", name, ", ".join(keys))

    if args.save:
        output_dir = Path(args.save)
        for explorer in explorers:
            output_path = output_dir / f"icc_{explorer.binding.family.key}.png"
            save_explorer(explorer, output_path, dpi=config.dpi)
            print(f"Figure saved to: {output_path}")

    if args.export_csv:
        df = write_curve_table([explorer.binding for explorer in explorers], Path(args.export_csv))
        print(f"Curve table ({len(df)} rows) saved to: {args.export_csv}")

    if args.no_show:
        for explorer in explorers:
            plt.close(explorer.figure)
    else:
        plt.show()

    return 0


if __name__ == '__main__':
    sys.exit(main())
