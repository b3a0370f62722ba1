"""Unified entry point for NoteVault.

This module provides a unified entry point that can start different interfaces:
- REST API server (default)
- CLI interface
"""

import argparse
import sys

from notevault.core.config import setup_logging


def main(argv: list[str] | None = None):
    """Main entry point with interface selection."""
    parser = argparse.ArgumentParser(
        description="NoteVault - local vault storage for notes and connections",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Interfaces:
  api         Start the REST API server (default)
  cli         Run a CLI command

Examples:
  python -m notevault                          # Start API server
  python -m notevault api --port 8080          # Start API on custom port
  python -m notevault cli notes ~/Brain        # List notes of a vault
""",
    )

    parser.add_argument(
        "interface",
        nargs="?",
        default="api",
        choices=["api", "cli"],
        help="Which interface to start (default: api)",
    )

    parser.add_argument(
        "--host",
        default=None,
        help="Host to bind API server to (default: 127.0.0.1)",
    )

    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port for API server (default: 8421)",
    )

    args, rest = parser.parse_known_args(argv)

    if args.interface == "api":
        import uvicorn

        from notevault.core import config

        setup_logging()
        is_valid, message = config.validate_api_environment()
        if not is_valid:
            print(f"Error: {message}")
            sys.exit(1)

        host = args.host or config.NOTEVAULT_HOST or "127.0.0.1"
        port = args.port or config.NOTEVAULT_PORT

        print(f"Starting NoteVault API server on {host}:{port}")
        uvicorn.run(
            "notevault.api.app:app",
            host=host,
            port=port,
            reload=False,
        )

    elif args.interface == "cli":
        from notevault.interfaces.cli.app import run_cli

        run_cli(rest)


if __name__ == "__main__":
    main()
