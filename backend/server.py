#!/usr/bin/env python3
"""
Backend Server Entry Point

Simple uvicorn launcher for the Issue Browser API.
Can be run directly or imported.

Usage:
    # Development mode with auto-reload
    python backend/server.py

    # Custom host/port
    python backend/server.py --host 0.0.0.0 --port 8080

    # Production mode (no reload)
    python backend/server.py --no-reload

    # Or use uvicorn directly
    uvicorn backend.app:app --reload
"""

import argparse


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Issue Browser API Server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Development mode (auto-reload enabled)
  python backend/server.py

  # Custom host/port
  python backend/server.py --host 0.0.0.0 --port 8080
        """
    )
    add_server_arguments(parser)
    return parser


def add_server_arguments(parser: argparse.ArgumentParser) -> None:
    """Add --host/--port/--no-reload to a parser (shared with main.py)."""
    parser.add_argument(
        "--host",
        type=str,
        default="127.0.0.1",
        help="Host to bind the server to (default: 127.0.0.1)"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port to run the API server on (default: 8000)"
    )
    parser.add_argument(
        "--no-reload",
        action="store_true",
        help="Disable auto-reload (use for production)"
    )


def run_server(host: str, port: int, reload: bool = True) -> None:
    """Print startup info and start uvicorn."""
    print("=" * 80)
    print("Issue Browser API Server")
    print("=" * 80)
    print(f"API will be available at: http://{host}:{port}")
    print(f"API docs available at: http://{host}:{port}/docs")
    print("")
    print("Press Ctrl+C to stop the server")
    print("=" * 80)
    print("")

    import uvicorn
    uvicorn.run(
        "backend.app:app",
        host=host,
        port=port,
        reload=reload,
        log_level="info"
    )


def main():
    """Launch the FastAPI backend server."""
    args = build_parser().parse_args()
    run_server(args.host, args.port, reload=not args.no_reload)


if __name__ == "__main__":
    main()
