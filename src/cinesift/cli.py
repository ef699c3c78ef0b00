"""CLI entry point for the CineSift server."""

from __future__ import annotations

import argparse
import json
import socket
import sys
from pathlib import Path


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point for the CineSift server."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.compile:
        sys.exit(_compile(Path(args.compile)))

    from cinesift.config.settings import Settings
    from cinesift.observability.logging import setup_logging

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
    if args.workers:
        settings.server.workers = args.workers
    if args.log_level:
        settings.observability.log_level = args.log_level

    setup_logging(settings.observability)
    _check_port(settings.server.host, settings.server.port)

    import uvicorn

    uvicorn.run(
        "cinesift.api.app:create_app",
        factory=True,
        host=settings.server.host,
        port=settings.server.port,
        workers=settings.server.workers if not args.reload else 1,
        reload=args.reload,
        log_level=settings.observability.log_level,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cinesift",
        description="CineSift — Movie search over RediSearch",
    )
    parser.add_argument("--config", "-c", type=str, default=None, help="Path to YAML configuration file")
    parser.add_argument("--host", type=str, default=None, help="Server bind address (overrides config)")
    parser.add_argument("--port", "-p", type=int, default=None, help="Server port (overrides config)")
    parser.add_argument("--workers", "-w", type=int, default=None, help="Number of worker processes")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload for development")
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["debug", "info", "warning", "error"],
        default=None,
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--compile",
        metavar="FILE",
        type=str,
        default=None,
        help="Print the query compiled from a JSON advanced-search filter ('-' reads stdin) and exit",
    )
    parser.add_argument("--version", action="version", version=f"CineSift {_get_version()}")
    return parser


def _compile(path: Path) -> int:
    """Compile a ``MovieQueryFilter`` JSON body and print the query string."""
    from pydantic import ValidationError

    from cinesift.config.settings import Settings
    from cinesift.exceptions import CineSiftError
    from cinesift.models.filter import MovieQueryFilter
    from cinesift.query.compiler import QueryCompiler
    from cinesift.query.registry import FieldRegistry

    try:
        raw = sys.stdin.read() if str(path) == "-" else path.read_text(encoding="utf-8")
        query_filter = MovieQueryFilter.model_validate(json.loads(raw))
        settings = Settings()
        compiler = QueryCompiler(
            FieldRegistry.movies(),
            bounded_upper_first=settings.query.bounded_upper_first,
        )
        print(compiler.compile(query_filter.to_criteria()))
    except (OSError, ValueError, ValidationError, CineSiftError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


def _check_port(host: str, port: int) -> None:
    """Exit with a message if the port is already taken."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.bind((host if host != "0.0.0.0" else "127.0.0.1", port))
    except OSError:
        print(f"Error: Port {port} is already in use. Run 'lsof -i :{port}' to find the process.", file=sys.stderr)
        sys.exit(1)
    finally:
        sock.close()


def _get_version() -> str:
    """Get the package version."""
    from cinesift import __version__

    return __version__


if __name__ == "__main__":
    main()
