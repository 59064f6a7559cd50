#!/usr/bin/env python3
"""
UK Location Data Mashup — Application Runner
=============================================
Starts the FastAPI server behind the dashboard.

Usage:
    python run.py                    # Default: http://localhost:8000
    python run.py --port 3000        # Custom port
    python run.py --host 127.0.0.1   # Bind to localhost only

Then, in another shell:
    streamlit run dashboard.py
"""

import argparse
import logging

import uvicorn

from mashup.config import API_HOST, API_PORT, LOG_FORMAT, LOG_LEVEL


def main():
    parser = argparse.ArgumentParser(description="UK Location Data Mashup — Server")
    parser.add_argument("--host", type=str, default=API_HOST, help="Bind host")
    parser.add_argument("--port", type=int, default=API_PORT, help="Bind port")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    args = parser.parse_args()

    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)

    print("╔══════════════════════════════════════════════════╗")
    print("║  UK Location Data Mashup                         ║")
    print(f"║  http://{args.host}:{args.port}".ljust(51) + "║")
    print("╚══════════════════════════════════════════════════╝")
    print()
    print("  API docs:  http://localhost:{}/docs".format(args.port))
    print("  Dashboard: streamlit run dashboard.py")
    print()

    uvicorn.run(
        "mashup.api:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
