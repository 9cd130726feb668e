"""
Partner Matching Engine - Main Entry Point
==========================================
Run this file to start the FastAPI server.

Usage:
    python main.py                    # Start server on port 8000
    python main.py --port 8080        # Start server on custom port
    python main.py --reload           # Start with auto-reload (dev mode)

API Documentation:
    http://localhost:8000/docs        # Swagger UI
    http://localhost:8000/redoc       # ReDoc
"""

import argparse
import logging
import uvicorn
from dotenv import load_dotenv

# Load environment variables before settings are read
load_dotenv()

from partner_match.config.settings import SERVER_CONFIG  # noqa: E402
from partner_match.logging_config import setup_logging  # noqa: E402

logger = logging.getLogger("partner_match")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Partner Matching Engine API Server")
    parser.add_argument(
        "--host",
        type=str,
        default=SERVER_CONFIG["host"],
        help=f"Host to bind the server to (default: {SERVER_CONFIG['host']})",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=SERVER_CONFIG["port"],
        help=f"Port to run the server on (default: {SERVER_CONFIG['port']})",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Number of worker processes (default: 1)",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        default=SERVER_CONFIG["log_level"],
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (default: INFO)",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=SERVER_CONFIG["log_file"],
        help="Optional rotating log file path",
    )
    return parser


def main():
    args = build_parser().parse_args()

    setup_logging(level=args.log_level, log_file=args.log_file)
    logger.info(
        "Partner Matching Engine 1.0.0 starting on http://%s:%d (docs at /docs)",
        args.host,
        args.port,
    )

    uvicorn.run(
        "partner_match.api.endpoints:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        workers=args.workers if not args.reload else 1,
        log_level=args.log_level.lower(),
    )


if __name__ == "__main__":
    main()
