"""CLI entry point for fluentsearch index administration."""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fluentsearch.config.settings import Settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fluentsearch",
        description="fluentsearch — Fluent query building for OpenSearch/Elasticsearch",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["debug", "info", "warning", "error"],
        default=None,
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"fluentsearch {_get_version()}",
    )

    commands = parser.add_subparsers(dest="command", required=True)
    indices = commands.add_parser("indices", help="Index administration")
    index_commands = indices.add_subparsers(dest="index_command", required=True)

    drop = index_commands.add_parser("drop", help="Drop an index")
    drop.add_argument("index", nargs="?", default=None, help="Index to drop (default: all configured indices)")
    drop.add_argument("--connection", type=str, default=None, help="Connection name (default from config)")
    drop.add_argument("--force", action="store_true", help="Drop indices without any confirmation messages")
    drop.set_defaults(handler=_drop_indices)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    from fluentsearch.config.settings import Settings
    from fluentsearch.observability.logging import setup_logging

    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: Config file not found: {config_path}", file=sys.stderr)
            return 1
        settings = Settings.from_yaml(config_path)
    else:
        settings = Settings()

    if args.log_level:
        settings.observability.log_level = args.log_level
    setup_logging(settings.observability)

    return asyncio.run(args.handler(args, settings))


async def _drop_indices(args: argparse.Namespace, settings: Settings) -> int:
    from fluentsearch.adapters.base.exceptions import TransportError
    from fluentsearch.adapters.base.registry import TransportNotFoundError
    from fluentsearch.core.connection import ConnectionManager

    indices = [args.index] if args.index is not None else list(settings.indices.keys())
    if not indices:
        print("No index given and no indices configured.", file=sys.stderr)
        return 1

    manager = ConnectionManager(settings)
    try:
        transport = await manager.connection(args.connection)
        for index in indices:
            if not await transport.index_exists(index):
                print(f"Index '{index}' does not exist.", file=sys.stderr)
                continue

            if args.force or _confirm(f"Are you sure to drop '{index}' index"):
                print(f"Dropping index: {index}")
                await transport.delete_index(index)
    except (TransportError, TransportNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        await manager.shutdown()

    return 0


def _confirm(question: str) -> bool:
    answer = input(f"{question} (yes/no) [no]: ")
    return answer.strip().lower() in {"y", "yes"}


def _get_version() -> str:
    """Get the package version."""
    try:
        from fluentsearch import __version__

        return __version__
    except ImportError:
        return "unknown"


if __name__ == "__main__":
    sys.exit(main())
