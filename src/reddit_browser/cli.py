"""CLI/bootstrap helpers for the Reddit browser application."""

from __future__ import annotations

import argparse
import logging
import logging.handlers
import os
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir

from reddit_browser.action_messages import build_actionable_error, build_actionable_success
from reddit_browser.config import (
    _coerce_fetch_window,
    _coerce_populate_threshold,
    _coerce_refresh_interval,
    get_config_path,
    load_config,
    save_config,
)
from reddit_browser.errors import TerminalSetupError
from reddit_browser.models import (
    CONFIG_APP_NAME,
    FETCH_WINDOW_LIMIT,
    MAX_REFRESH_INTERVAL_SECONDS,
    MIN_REFRESH_INTERVAL_SECONDS,
    TIME_FILTERS,
    UserConfig,
)
from reddit_browser.parsing import normalize_subreddit

logger = logging.getLogger(__name__)


def _configure_logging(debug: bool) -> None:
    """Configure logging. When debug=True, logs to file at DEBUG level."""
    if not debug:
        # Default: suppress all logging (TUI captures stderr)
        logging.disable(logging.CRITICAL)
        return

    log_dir = Path(user_config_dir(CONFIG_APP_NAME))
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "debug.log"

    handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    logging.root.addHandler(handler)
    logging.root.setLevel(logging.DEBUG)


def _configure_color_mode(color_mode: str) -> None:
    """Configure environment hints for terminal color behavior."""
    if color_mode == "never":
        os.environ["NO_COLOR"] = "1"
        os.environ.pop("FORCE_COLOR", None)
        return
    if color_mode == "always":
        os.environ["FORCE_COLOR"] = "1"
        os.environ.pop("NO_COLOR", None)
        return
    # auto
    os.environ.pop("FORCE_COLOR", None)


def _validate_interactive_tty() -> bool:
    """Return True when stdin/stdout are interactive terminals."""
    return bool(sys.stdin.isatty() and sys.stdout.isatty())


def _apply_overrides(args: argparse.Namespace, config: UserConfig) -> UserConfig:
    """Apply CLI flags on top of the loaded config.

    Raises:
        ValueError: If a flag value is invalid.
    """
    if args.subreddit is not None:
        config.subreddit = normalize_subreddit(args.subreddit)
    if args.time_filter is not None:
        config.time_filter = args.time_filter
    if args.limit is not None:
        if not 1 <= args.limit <= FETCH_WINDOW_LIMIT:
            raise ValueError(f"--limit must be between 1 and {FETCH_WINDOW_LIMIT}")
        config.fetch_window = _coerce_fetch_window(args.limit)
    if args.refresh_interval is not None:
        interval = args.refresh_interval
        if not MIN_REFRESH_INTERVAL_SECONDS <= interval <= MAX_REFRESH_INTERVAL_SECONDS:
            raise ValueError(
                "--refresh-interval must be between "
                f"{MIN_REFRESH_INTERVAL_SECONDS:g} and {MAX_REFRESH_INTERVAL_SECONDS:g} seconds"
            )
        config.refresh_interval_seconds = _coerce_refresh_interval(interval)
    config.populate_threshold = _coerce_populate_threshold(
        config.populate_threshold, config.fetch_window
    )
    return config


def _run_app(app: Any) -> int:
    """Run the TUI and translate terminal failures into TerminalSetupError."""
    try:
        app.run()
    except OSError as exc:
        raise TerminalSetupError(str(exc)) from exc
    return_code = getattr(app, "return_code", None)
    return return_code if isinstance(return_code, int) else 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Browse a subreddit's top posts in a terminal dashboard"
    )
    parser.add_argument(
        "-s",
        "--subreddit",
        type=str,
        default=None,
        help="Subreddit to browse, with or without the r/ prefix (default: config value)",
    )
    parser.add_argument(
        "-t",
        "--time-filter",
        choices=TIME_FILTERS,
        default=None,
        help="Top-posts window: hour, day, week, month, year, all (default: config value)",
    )
    parser.add_argument(
        "-n",
        "--limit",
        type=int,
        default=None,
        help=f"Posts to fetch per refresh (1-{FETCH_WINDOW_LIMIT}; default: config value)",
    )
    parser.add_argument(
        "--refresh-interval",
        type=float,
        default=None,
        help="Seconds between refresh attempts while the feed is short (default: config value)",
    )
    parser.add_argument(
        "--save-config",
        action="store_true",
        help="Save the effective settings as defaults and exit",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging to file (~/.config/reddit-browser/debug.log)",
    )
    parser.add_argument(
        "--color",
        choices=["auto", "always", "never"],
        default="auto",
        help="Color output mode for terminal UI (default: auto)",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable terminal colors (equivalent to --color never)",
    )
    parser.add_argument(
        "--ascii",
        action="store_true",
        help="Use ASCII-only list markers for compatibility with limited terminals",
    )
    return parser


def main(
    argv: list[str] | None = None,
    *,
    load_config_fn: Callable[[], UserConfig] = load_config,
    save_config_fn: Callable[[UserConfig], bool] = save_config,
    configure_logging_fn: Callable[[bool], None] = _configure_logging,
    configure_color_mode_fn: Callable[[str], None] = _configure_color_mode,
    validate_interactive_tty_fn: Callable[[], bool] = _validate_interactive_tty,
    app_factory: Callable[..., Any] | None = None,
) -> int:
    """Main entry point. Returns exit code."""
    args = build_parser().parse_args(argv)

    color_mode = "never" if args.no_color else args.color
    configure_color_mode_fn(color_mode)
    configure_logging_fn(args.debug)
    logger.debug("reddit-viewer starting, cwd=%s", Path.cwd())

    config = load_config_fn()
    try:
        config = _apply_overrides(args, config)
    except ValueError as exc:
        print(
            build_actionable_error(
                "apply the command-line options",
                why=str(exc),
                next_step="fix the flag value or run with --help",
            ),
            file=sys.stderr,
        )
        return 1

    if args.save_config:
        if not save_config_fn(config):
            print(
                build_actionable_error(
                    "save the configuration",
                    why=f"{get_config_path()} could not be written",
                    next_step="check directory permissions or rerun with --debug",
                ),
                file=sys.stderr,
            )
            return 1
        print(
            build_actionable_success(
                f"Saved settings for r/{config.subreddit}",
                detail=f"Written to {get_config_path()}",
            )
        )
        return 0

    if not validate_interactive_tty_fn():
        print(
            "Error: reddit-viewer requires an interactive TTY for the full UI.",
            file=sys.stderr,
        )
        print("Next steps:", file=sys.stderr)
        print("  - Run reddit-viewer directly in a terminal session", file=sys.stderr)
        print("  - Use --save-config for non-interactive setup", file=sys.stderr)
        print("  - Use --help for command documentation", file=sys.stderr)
        return 2

    if app_factory is None:
        from reddit_browser.app import RedditBrowser as _RedditBrowser

        app_factory = _RedditBrowser

    app = app_factory(config, ascii_icons=args.ascii)
    try:
        return _run_app(app)
    except TerminalSetupError as exc:
        logger.error("Terminal setup failed: %s", exc)
        print(
            build_actionable_error(
                "start the terminal UI",
                why=str(exc),
                next_step="run reddit-viewer in a regular terminal emulator",
            ),
            file=sys.stderr,
        )
        return 1


__all__ = [
    "_apply_overrides",
    "_configure_color_mode",
    "_configure_logging",
    "_run_app",
    "_validate_interactive_tty",
    "build_parser",
    "main",
]
