# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Entry point for running the gateway as a module.

Usage:
    python -m svue_gateway [--port 2727] [--host 0.0.0.0] [--reload]
"""

import argparse

import uvicorn

from svue_gateway.core.config import get_settings
from svue_gateway.utils.logging import get_logger, setup_logging


def main() -> None:
    settings = get_settings()

    parser = argparse.ArgumentParser(description="svue-gateway: stateless REST gateway for StudentVue")
    parser.add_argument(
        "--port", type=int, default=settings.api.port,
        help=f"Port to serve on (default: {settings.api.port})",
    )
    parser.add_argument(
        "--host", type=str, default=settings.api.host,
        help=f"Host to bind to (default: {settings.api.host})",
    )
    parser.add_argument(
        "--reload", action="store_true", default=settings.api.reload,
        help="Enable auto-reload for development",
    )

    args = parser.parse_args()
    setup_logging(settings)

    get_logger(__name__).info("serving", host=args.host, port=args.port, reload=args.reload)

    uvicorn.run(
        "svue_gateway.api.app:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
    )


if __name__ == "__main__":
    main()
