"""CLI entry point for the docsearch server."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point for the docsearch server."""
    parser = argparse.ArgumentParser(
        prog="docsearch",
        description="docsearch — Multi-tenant document search API",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Server bind address (overrides config)",
    )
    parser.add_argument(
        "--port",
        "-p",
        type=int,
        default=None,
        help="Server port (overrides config)",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["debug", "info", "warning", "error"],
        default=None,
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--read-only",
        action="store_true",
        help="Reject data-modifying requests",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"docsearch {_get_version()}",
    )

    args = parser.parse_args(argv)

    from docsearch.config.settings import Settings
    from docsearch.observability.logging import setup_logging

    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: Config file not found: {config_path}", file=sys.stderr)
            sys.exit(1)
        settings = Settings.from_yaml(config_path)
    else:
        settings = Settings()

    # Apply CLI overrides
    if args.host:
        settings.server.host = args.host
    if args.port:
        settings.server.port = args.port
    if args.log_level:
        settings.observability.log_level = args.log_level
    if args.read_only:
        settings.updates_allowed = False

    setup_logging(settings.observability)

    import uvicorn

    from docsearch.api.app import create_app

    if args.reload:
        # Reload needs an import string; the factory re-reads settings from the environment.
        uvicorn.run(
            "docsearch.api.app:create_app",
            factory=True,
            host=settings.server.host,
            port=settings.server.port,
            reload=True,
            log_config=None,
        )
        return

    uvicorn.run(
        create_app(settings),
        host=settings.server.host,
        port=settings.server.port,
        log_config=None,
    )


def _get_version() -> str:
    """Get the package version."""
    try:
        from docsearch import __version__

        return __version__
    except ImportError:
        return "unknown"


if __name__ == "__main__":
    main()
