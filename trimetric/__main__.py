"""Run the server with uvicorn: ``python -m trimetric``."""

from __future__ import annotations

import os

import uvicorn


def main() -> None:
    host = (os.getenv("HOST") or "").strip() or "0.0.0.0"
    try:
        port = int((os.getenv("PORT") or "").strip() or 8080)
    except ValueError:
        port = 8080
    uvicorn.run("trimetric.server:app", host=host, port=port, log_config=None)


if __name__ == "__main__":
    main()
