from __future__ import annotations

import argparse

import uvicorn

from user_service.config import get_settings


def main() -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="User registration, orders and anonymous id service")
    parser.add_argument("--host", default="0.0.0.0", help="Interface to bind")
    parser.add_argument("--port", type=int, default=settings.port, help="Port to listen on (default: $PORT)")
    args = parser.parse_args()

    uvicorn.run("user_service.main:app", host=args.host, port=args.port, log_config=None)


if __name__ == "__main__":
    main()
