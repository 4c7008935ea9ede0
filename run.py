#!/usr/bin/env python3
"""
Development runner script for the Error Capture API.

Usage:
    python run.py                    # Run with default settings
    python run.py --port 8080        # Run on custom port
    python run.py --reload           # Enable auto-reload
"""

import argparse

from error_capture.core.config import get_settings
from error_capture.main import run_development_server


def main():
    """Main entry point for development server."""
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Run the Error Capture API")
    parser.add_argument("--host", default=settings.API_HOST, help=f"Host to bind to (default: {settings.API_HOST})")
    parser.add_argument("--port", type=int, default=settings.API_PORT, help=f"Port to bind to (default: {settings.API_PORT})")
    parser.add_argument("--reload", action="store_true", default=False, help="Enable auto-reload for development")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=settings.LOG_LEVEL.value,
        help=f"Set uvicorn log level (default: {settings.LOG_LEVEL.value})",
    )
    args = parser.parse_args()

    print(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    print(f"Server: http://{args.host}:{args.port}")
    print(f"Health Check: http://{args.host}:{args.port}/api/v1/health")

    run_development_server(host=args.host, port=args.port, reload=args.reload, log_level=args.log_level.lower())


if __name__ == "__main__":
    main()
