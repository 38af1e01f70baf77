"""
Backend startup script with Windows event loop fix.

Usage:
    python run.py
    python run.py --reload
    python run.py --port 8080

The script sets WindowsSelectorEventLoopPolicy BEFORE any async imports,
which psycopg3 requires on Windows.
"""

import os
import sys

# Set event loop policy before uvicorn creates its event loop
if sys.platform == "win32":
    import asyncio

    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

    # Reloaded subprocesses inherit the fix through the environment
    os.environ["PNL_DASHBOARD_WINDOWS_LOOP_FIX"] = "1"

import uvicorn

from pnl_dashboard.config import settings


def main() -> None:
    """Start the FastAPI application."""
    import argparse

    parser = argparse.ArgumentParser(description="Run the P&L dashboard API")
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind to")
    parser.add_argument("--port", type=int, default=settings.backend_port, help="Port to bind to")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")

    args = parser.parse_args()

    print(f"[STARTUP] Starting server on {args.host}:{args.port} (reload={args.reload})")

    uvicorn.run(
        "pnl_dashboard.api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        loop="asyncio",
    )


if __name__ == "__main__":
    main()
