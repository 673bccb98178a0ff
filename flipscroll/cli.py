"""Command line interface for flipscroll."""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Sequence

from .config import Config, ConfigError, load_config
from .core.paging import Limit, coerce_limit


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="flipscroll", description="flipscroll paged table tools")
    subparsers = parser.add_subparsers(dest="command")

    serve_parser = subparsers.add_parser("serve", help="Serve configured datasets as paged JSON and HTML")
    serve_parser.add_argument("--config", default="config.toml", help="Path to configuration file")
    serve_parser.add_argument("--host", default=None, help="Override server host")
    serve_parser.add_argument("--port", type=int, default=None, help="Override server port")
    serve_parser.add_argument("--reload", action="store_true", help="Enable uvicorn reload (development only)")

    render_parser = subparsers.add_parser("render", help="Fetch one page from a remote endpoint and print the markup")
    render_parser.add_argument("action", help="Endpoint path, requested as <base-url>/<action>.json")
    render_parser.add_argument("--config", default="config.toml", help="Path to configuration file")
    render_parser.add_argument("--base-url", default=None, help="Override transport base URL")
    render_parser.add_argument("--page", type=int, default=None, help="Page number to fetch")
    render_parser.add_argument("--limit", default=None, help="Rows per page, or 'all'")
    render_parser.add_argument("--data-key", default=None, help="Response field holding the rows")
    render_parser.add_argument("--row-template", default=None, help="Row template with {field} placeholders")
    render_parser.add_argument("--header-template", default=None, help="Header template with {field} placeholders")

    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        return 1

    try:
        config = load_config(args.config)
    except ConfigError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 2
    _configure_logging(config)

    if args.command == "serve":
        return _cmd_serve(args, config)
    if args.command == "render":
        return _cmd_render(args, config)

    parser.print_help()
    return 1


def _configure_logging(config: Config) -> None:
    logging.basicConfig(
        level=config.logging.level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _cmd_serve(args: argparse.Namespace, config: Config) -> int:
    from .server.app import create_app

    try:
        app = create_app(config)
    except ValueError as exc:
        print(str(exc), file=sys.stderr)
        return 1

    host = args.host or config.server.host
    port = args.port or config.server.port

    import uvicorn

    uvicorn.run(app, host=host, port=port, reload=args.reload, log_level=config.logging.level.lower())
    return 0


def _cmd_render(args: argparse.Namespace, config: Config) -> int:
    from .client.controller import FlipScroll

    if args.base_url:
        config.transport.base_url = args.base_url
    config.table.action = args.action
    if args.page is not None:
        config.table.page = args.page
    if args.limit is not None:
        config.table.limit = _parse_limit(args.limit)
    if args.data_key:
        config.table.data_key = args.data_key

    table = FlipScroll.from_config(config)
    if args.row_template:
        table.set_row_template(args.row_template)
    if args.header_template:
        table.set_row_header_template(args.header_template)

    async def run() -> bool:
        try:
            return await table.load()
        finally:
            await table.aclose()

    if not asyncio.run(run()):
        print(table.dialog.markup, file=sys.stderr)
        return 1
    print(table.container.markup)
    return 0


def _parse_limit(value: str) -> Limit:
    try:
        return coerce_limit(value)
    except ValueError as exc:
        raise SystemExit(f"Invalid limit: {value}") from exc


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
