#!/usr/bin/env python3
"""Launch the omurice ketchup drawing window.

Loads and validates the app config, configures logging, then runs the
pygame window and the program's subscriptions on one asyncio loop until
the window closes.

CLI:
    python scripts/launch_omurice.py
    python scripts/launch_omurice.py --locale ja-JP --seed 7
    python scripts/launch_omurice.py --config my_omurice.yaml \\
                                     --export-dir ~/Pictures/omurice -v

Exit codes:
    0  window closed normally
    2  config missing or invalid
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import numpy as np

from omurice.app.export import ExportSink
from omurice.app.program import OmuriceProgram
from omurice.app.window import OmuriceWindow
from omurice.utils import validators
from omurice.utils.logging_config import install_excepthook, setup_logging, shutdown

logger = logging.getLogger("omurice.launch")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Draw on omurice with ketchup"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to an omurice.v1 config (default: packaged config)",
    )
    parser.add_argument(
        "--export-dir",
        type=str,
        default=None,
        help="Directory for downloaded PNG snapshots (overrides config)",
    )
    parser.add_argument(
        "--locale",
        type=str,
        choices=["en-US", "ja-JP"],
        default=None,
        help="UI language for this session (persisted like the in-app toggle)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed the growth model for reproducible strokes",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log at DEBUG level",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Also write logs to this file",
    )
    return parser


def main(argv=None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    try:
        cfg = validators.load_app_config(args.config)
    except (FileNotFoundError, validators.ConfigError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    log_kwargs = cfg.logging.setup_kwargs()
    if args.verbose:
        log_kwargs['log_level'] = "DEBUG"
    if args.log_file:
        log_kwargs['log_file'] = args.log_file
    setup_logging(**log_kwargs, context={"app": "omurice"})
    install_excepthook()

    export_sink = None
    if args.export_dir:
        export_sink = ExportSink(Path(args.export_dir).expanduser(), cfg.export.prefix)

    program = OmuriceProgram(
        cfg,
        rng=np.random.RandomState(args.seed),
        export_sink=export_sink,
    )
    if args.locale:
        program.select_locale(args.locale)

    logger.info(f"Starting omurice (locale={program.locale}, seed={args.seed})")
    window = OmuriceWindow(program, cfg.window)
    try:
        asyncio.run(window.run())
    except KeyboardInterrupt:
        logger.info("Interrupted")
    finally:
        shutdown()
    return 0


if __name__ == "__main__":
    sys.exit(main())
