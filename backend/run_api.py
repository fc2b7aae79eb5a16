#!/usr/bin/env python
"""
Run the Floe API server.

Usage:
    python run_api.py
    python run_api.py --reload       # Development mode
    python run_api.py --reset-admin  # Reset the admin password and exit
"""

import argparse
import logging
import sys

import uvicorn

from shared.config import get_settings
from shared.exceptions import FloeError


def reset_admin() -> int:
    """Re-hash FLOE_ADMIN_PASSWORD onto FLOE_ADMIN_EMAIL and reactivate it."""
    from api.dependencies import get_container

    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())
    try:
        get_container().reset_admin()
    except FloeError as e:
        print(f"Failed to reset admin user: {e.message}", file=sys.stderr)
        return 1
    print(f"Admin user {settings.admin_email} reset")
    return 0


def main():
    parser = argparse.ArgumentParser(description="Run Floe API server")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    parser.add_argument("--host", type=str, help="Host to bind to")
    parser.add_argument("--port", type=int, help="Port to bind to")
    parser.add_argument(
        "--reset-admin",
        action="store_true",
        help="Reset the admin user's password from FLOE_ADMIN_PASSWORD and exit",
    )
    args = parser.parse_args()

    if args.reset_admin:
        sys.exit(reset_admin())

    settings = get_settings()

    uvicorn.run(
        "api:app",
        host=args.host or settings.host,
        port=args.port or settings.port,
        reload=args.reload or settings.reload,
    )


if __name__ == "__main__":
    main()
