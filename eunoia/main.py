#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
4Eunoia - Server entry point

Version: 1.0.0
"""

import argparse
import logging
import sys

import uvicorn

from eunoia.config import config
from eunoia.utils.logger import setup_logger

logger = logging.getLogger(__name__)


def main():
    """Run the API server"""
    parser = argparse.ArgumentParser(description='Run the 4Eunoia API server')
    parser.add_argument('--host', default=config.server.host, help='Server host')
    parser.add_argument('--port', type=int, default=config.server.port, help='Server port')
    parser.add_argument('--reload', action='store_true', help='Reload on code changes')

    args = parser.parse_args()

    setup_logger()
    logger.info(f"Starting server on http://{args.host}:{args.port}")
    if args.reload and not config.is_development():
        logger.warning("--reload is ignored outside development")
    if config.server.debug_mode:
        logger.info(f"API docs: http://{args.host}:{args.port}/api/docs")

    try:
        uvicorn.run(
            "eunoia.dashboard.app:app",
            host=args.host,
            port=args.port,
            reload=args.reload and config.is_development(),
            log_level=config.log_level.value.lower(),
            access_log=False,
        )
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except OSError as e:
        logger.error(f"Server failed to start: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
