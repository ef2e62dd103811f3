#!/usr/bin/env python3
"""
mousequake - keep the session awake

Periodically nudges the mouse pointer along a small closed pattern
(linear, circle, star, square, infinity) until interrupted.
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from config import Config, LOG_LEVELS, Pattern
from config_persistence import load_config, save_config
from logging_utils import log_event, set_log_level
from mouse_engine import InjectionError, make_mouse
from quake_controller import QuakeController
from termination import SignalRegistrationError, register_termination_flag
from trajectory import make_trajectory

__version__ = "0.1.0"

EXIT_OK = 0
EXIT_FAILURE = 1


def _positive_float(text: str) -> float:
    try:
        value = float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{text!r} is not a number") from None
    if not value > 0 or value == float("inf"):
        raise argparse.ArgumentTypeError(f"{text!r} must be a positive number")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mousequake",
        description="Keep the display awake by quaking the mouse pointer",
    )
    parser.add_argument(
        "-p", "--pattern",
        choices=[p.name.lower() for p in Pattern],
        help="Movement pattern (default: linear)",
    )
    parser.add_argument(
        "-w", "--width",
        type=_positive_float,
        help="Pattern size in pixels (default: 1)",
    )
    parser.add_argument(
        "-i", "--interval",
        type=_positive_float,
        help="Seconds between moves (default: 10)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        default=None,
        help="Log moves instead of moving the pointer",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Console log level (default: INFO)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Config file to read defaults from (default: ~/.mousequake/config.json)",
    )
    parser.add_argument(
        "--save-config",
        action="store_true",
        help="Write the effective settings back to the config file",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def resolve_config(args: argparse.Namespace) -> Config:
    """Config file values, overridden by whatever was given on the command line."""
    config = load_config(args.config)
    if args.pattern is not None:
        config.motion.pattern = Pattern.from_name(args.pattern)
    if args.width is not None:
        config.motion.size = args.width
    if args.interval is not None:
        config.timing.interval_s = args.interval
    if args.dry_run is not None:
        config.dry_run = args.dry_run
    if args.log_level is not None:
        config.log_level = args.log_level
    return config


def run_quaker(config: Config, *, mouse_factory=make_mouse,
               register_signals=register_termination_flag) -> int:
    """Register signals, then quake until one arrives. Returns the process exit code."""
    try:
        cancel_flag = register_signals()
    except SignalRegistrationError as e:
        log_event("ERROR", "App", "Signal registration failed", error=e)
        return EXIT_FAILURE

    trajectory = make_trajectory(config.motion.pattern, config.motion.size)
    log_event("INFO", "App", "Quaking",
              pattern=config.motion.pattern.name.lower(),
              size=config.motion.size,
              interval_s=config.timing.interval_s,
              dry_run=config.dry_run)

    try:
        mouse = mouse_factory(config.dry_run)
        controller = QuakeController(mouse, poll_interval=config.timing.signal_check_interval_s)
        controller.run(trajectory, config.timing.interval_s, cancel_flag)
    except InjectionError as e:
        log_event("ERROR", "App", "Mouse injection failed", error=e)
        return EXIT_FAILURE

    return EXIT_OK


def main(argv: Optional[list[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.log_level is not None:
        set_log_level(args.log_level)
    config = resolve_config(args)
    set_log_level(config.log_level)

    if args.save_config:
        save_config(config, args.config)

    sys.exit(run_quaker(config))


if __name__ == "__main__":
    main()
