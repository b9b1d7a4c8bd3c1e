"""
Command line entry point - starts either the FastAPI or the http.server variant
"""

import argparse
import logging

from todo_service.config.settings import HOST, PORT, LOG_LEVEL

logger = logging.getLogger(__name__)

SERVER_FASTAPI = "fastapi"
SERVER_STDLIB = "stdlib"

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="ToDo Resource Service")
    parser.add_argument(
        "--server",
        choices=[SERVER_FASTAPI, SERVER_STDLIB],
        default=SERVER_FASTAPI,
        help="HTTP front end to run (default: fastapi)"
    )
    parser.add_argument("--host", default=HOST, help=f"Bind address (default: {HOST})")
    parser.add_argument("--port", type=int, default=PORT, help=f"Listen port (default: {PORT})")
    return parser

def main(argv=None):
    args = build_parser().parse_args(argv)

    # Configure logging
    logging.basicConfig(level=LOG_LEVEL)

    if args.server == SERVER_STDLIB:
        from todo_service.stdlib_server import serve
        serve(args.host, args.port)
        return

    import uvicorn
    from todo_service.app import create_app

    logger.info(f"Starting ToDo Resource Service on port {args.port}")
    uvicorn.run(create_app(), host=args.host, port=args.port, log_level=LOG_LEVEL.lower())
