#!/usr/bin/env python3
"""
Pages Tools Server
------------------
Runs the FastAPI service bus with the Pages tool registry.

Usage:
    python -m infra.server --port 8000
    python -m infra.server --config config.yaml --log-level DEBUG
"""

import argparse
import logging

import uvicorn
from rich.console import Console

from infra.config import LOG_LEVELS, AutomationSettings, load_settings
from infra.logging import configure_logging
from infra.service_bus import ServiceBus
from scripting import SubprocessScriptExecutor
from tools import create_pages_registry

console = Console()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Pages Tools Server")
    parser.add_argument("--config", default="config.yaml", help="YAML config file")
    parser.add_argument("--host", help="Host to bind to")
    parser.add_argument("--port", type=int, help="Port to bind to")
    parser.add_argument("--log-level", choices=LOG_LEVELS)
    return parser


def resolve_settings(parser: argparse.ArgumentParser, args: argparse.Namespace) -> AutomationSettings:
    """
    Load the config file and apply command-line overrides.

    A bad config value exits through parser.error before anything starts.
    """
    try:
        settings = load_settings(args.config)
    except ValueError as e:
        parser.error(f"{args.config}: {e}")

    if args.host:
        settings.host = args.host
    if args.port:
        settings.port = args.port
    if args.log_level:
        settings.log_level = args.log_level
    return settings


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = resolve_settings(parser, args)
    host = settings.host
    port = settings.port
    log_level = settings.log_level

    configure_logging(
        level=getattr(logging, log_level, logging.INFO),
        log_dir=settings.log_dir,
        file=settings.log_file,
    )

    registry = create_pages_registry(SubprocessScriptExecutor(), settings)
    app = ServiceBus(registry).create_app()

    console.print(f"\n[bold green]Pages Tools[/bold green] ({len(registry)} tools)")
    console.print(f"Scripting [cyan]{settings.application}[/cyan] via {settings.interpreter}")
    console.print(f"Running on http://{host}:{port}")
    console.print("[dim]Press Ctrl+C to stop[/dim]\n")

    uvicorn.run(
        app,
        host=host,
        port=port,
        log_level=log_level.lower()
    )


if __name__ == "__main__":
    main()
