"""
Serve the API with uvicorn. Run from project root:
  python -m acquisitions.scripts.run_api [--host HOST] [--port PORT] [--reload]
or, once installed, the acquisitions-api console script.
"""
import argparse

import uvicorn

from acquisitions.core.config import settings


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Run the Acquisitions API server.")
    parser.add_argument("--host", default=settings.HOST)
    parser.add_argument("--port", type=int, default=settings.PORT)
    parser.add_argument("--reload", action="store_true", help="Restart on code changes (dev only)")
    args = parser.parse_args(argv)

    uvicorn.run(
        "acquisitions.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
