"""marketcard.cli

Command line interface entry point for marketcard.

Design constraints:
- argparse-based.
- Lazy imports: do not import heavy dependencies at parse time.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

EPILOG = "One snapshot per request. Nothing is cached."


@dataclass(frozen=True)
class CliContext:
    repo_root: Path


def _repo_root_from_cwd() -> Path:
    return Path.cwd()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="marketcard",
        description="Crypto market overview card: data, narrative, preview server.",
        epilog=EPILOG,
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print version and exit.",
    )

    sub = parser.add_subparsers(dest="command")

    p_snap = sub.add_parser("snapshot", help="Assemble one snapshot and print it as JSON")
    p_snap.add_argument("--no-analysis", action="store_true", help="Skip the narrative request.")

    sub.add_parser("prompt", help="Print the analysis prompt for a live snapshot")

    p_api = sub.add_parser("api", help="Start the preview server")
    p_api.add_argument("--host", default=None)
    p_api.add_argument("--port", type=int, default=None)

    sub.add_parser("status", help="Print configuration status")

    return parser


def _print_version() -> None:
    from marketcard import __version__

    print(f"marketcard v{__version__}")


def _load_config(ctx: CliContext):
    from marketcard.core.config import Config
    from marketcard.core.logs import configure_logging

    config = Config.load(ctx.repo_root)
    configure_logging(config.logging)
    return config


def _cmd_snapshot(ctx: CliContext, args: argparse.Namespace) -> int:
    import asyncio

    from marketcard.core.exceptions import UpstreamError
    from marketcard.snapshot import assemble_snapshot

    config = _load_config(ctx)
    if args.no_analysis:
        config.analysis.enabled = False

    try:
        snapshot = asyncio.run(assemble_snapshot(config))
    except UpstreamError as e:
        print(f"snapshot failed: {e}", file=sys.stderr)
        return 1

    print(snapshot.model_dump_json(indent=2))
    return 0


def _cmd_prompt(ctx: CliContext, args: argparse.Namespace) -> int:
    import asyncio

    from marketcard.core.exceptions import UpstreamError
    from marketcard.narrative.prompt import AnalysisInput, build_prompt_text
    from marketcard.snapshot import assemble_snapshot

    config = _load_config(ctx)
    config.analysis.enabled = False

    try:
        snap = asyncio.run(assemble_snapshot(config))
    except UpstreamError as e:
        print(f"snapshot failed: {e}", file=sys.stderr)
        return 1

    figures = AnalysisInput.from_snapshot(snap)
    print(build_prompt_text(figures, max_coins=config.analysis.max_coins))
    return 0


def _cmd_api(ctx: CliContext, args: argparse.Namespace) -> int:
    config = _load_config(ctx)

    host = args.host or config.api.host
    port = args.port or config.api.port

    import uvicorn

    uvicorn.run("api.main:app", host=host, port=port, reload=False, log_config=None)
    return 0


def _cmd_status(ctx: CliContext, args: argparse.Namespace) -> int:
    from marketcard.core.config import Config
    from marketcard.core.exceptions import ConfigError

    repo_root = ctx.repo_root
    cfg_user = repo_root / "config" / "user.yaml"
    cfg = cfg_user if cfg_user.exists() else repo_root / "config" / "default.yaml"

    try:
        config = Config.from_yaml(cfg) if cfg.exists() else Config()
        config_status = str(cfg) if cfg.exists() else "defaults (no config file)"
    except ConfigError as e:
        print(f"- config: {cfg} (error: {e})")
        return 1

    print("marketcard status")
    print(f"- config: {config_status}")
    print(f"- symbols: {', '.join(config.universe.symbols)}")
    print(f"- cmc api key: {'set' if config.coinmarketcap.api_key else 'MISSING'}")
    print(f"- analysis: {'enabled' if config.analysis.enabled else 'disabled'}")
    print(f"- preview: {config.public_base_url}/preview")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        _print_version()
        return 0

    if not args.command:
        parser.print_help()
        return 2

    ctx = CliContext(repo_root=_repo_root_from_cwd())

    dispatch: dict[str, Callable[[CliContext, argparse.Namespace], int]] = {
        "snapshot": _cmd_snapshot,
        "prompt": _cmd_prompt,
        "api": _cmd_api,
        "status": _cmd_status,
    }

    fn = dispatch.get(str(args.command))
    if fn is None:
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 2

    return int(fn(ctx, args))


if __name__ == "__main__":
    raise SystemExit(main())
