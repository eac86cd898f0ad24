"""
Serve the API with uvicorn. Run from project root:
  python -m taskboard.scripts.run_api [--host HOST] [--port PORT] [--reload]
Defaults come from API_HOST and API_PORT.
"""
import argparse
import sys

import uvicorn

from taskboard.core.config import get_settings


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Run the Taskboard API server.")
    parser.add_argument("--host", default=settings.API_HOST, help="Bind address")
    parser.add_argument("--port", type=int, default=settings.API_PORT, help="Bind port")
    parser.add_argument("--reload", action="store_true", help="Restart on code changes (development only)")
    args = parser.parse_args(argv)

    uvicorn.run(
        "taskboard.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.LOG_LEVEL.lower(),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
