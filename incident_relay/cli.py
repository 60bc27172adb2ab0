from __future__ import annotations

import argparse
import os

from .config import settings


def main() -> int:
    p = argparse.ArgumentParser(description="Incident Relay webhook server")
    p.add_argument("--host", default=os.environ.get("HOST", "0.0.0.0"))
    p.add_argument("--port", type=int, default=int(os.environ.get("PORT", "8080")))
    p.add_argument("--log-level", default=None, help="overrides LOG_LEVEL")
    args = p.parse_args()

    if args.log_level:
        settings.log_level = args.log_level

    import uvicorn
    from .main import create_app

    uvicorn.run(create_app(settings), host=args.host, port=args.port, log_level=settings.log_level.lower())
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
