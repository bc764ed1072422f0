import argparse
from pathlib import Path
import os
import sys

# Ensure repository root is on sys.path so `from tilebrot...` works when running
# this script directly (e.g. `python scripts/make_image.py`).
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from tilebrot.config import RenderConfig, load_config
from tilebrot.iterators import INTERIOR_MODES
from tilebrot.pipeline import compute
from tilebrot.render import render_png, render_svg


def build_parser():
    parser = argparse.ArgumentParser(
        description="Render an escape-time tile poster with a quantile color key"
    )
    parser.add_argument("--config", type=str, default=None,
                        help="YAML config (defaults to the built-in 48x32 poster)")
    parser.add_argument("--outfile", type=str, required=True)
    parser.add_argument("--format", type=str, default=None, choices=["png", "svg"],
                        help="Output format (default: from --outfile suffix)")

    # overrides
    parser.add_argument("--tiles-x", dest="tiles_x", type=int, default=None)
    parser.add_argument("--tiles-y", dest="tiles_y", type=int, default=None)
    parser.add_argument("--max_iter", type=int, default=None)
    parser.add_argument("--interior", type=str, default=None, choices=list(INTERIOR_MODES))
    parser.add_argument("--scale", type=float, default=None)
    parser.add_argument("--derive-key", dest="derive_key", action="store_true",
                        help="Ignore the configured color_key and derive one from the data")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    if args.config is not None:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: Config file not found: {config_path}")
            return 1
        config = load_config(config_path)
    else:
        config = RenderConfig()

    config = config.with_overrides(
        tiles_x=args.tiles_x,
        tiles_y=args.tiles_y,
        max_iter=args.max_iter,
        interior=args.interior,
        scale=args.scale,
    )

    out_path = Path(args.outfile)
    fmt = args.format or (out_path.suffix.lstrip(".").lower() or "png")
    if fmt not in ("png", "svg"):
        print(f"Error: Unsupported output format: {fmt}")
        return 1

    print(f"[run] grid={config.tiles_x}x{config.tiles_y}, max_iter={config.max_iter}, "
          f"interior={config.interior}, saving to {out_path}")

    result = compute(config, use_key_override=not args.derive_key)

    source = "derived" if result.derived else "configured"
    print(f"[run] color key ({source}): {result.key.tolist()}")
    for i, count in enumerate(result.counts):
        print(f"{i + 1},{count}")

    if fmt == "svg":
        render_svg(result, config, out_path)
    else:
        render_png(result, config, out_path)

    print("[run] done.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
