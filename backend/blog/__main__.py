"""
Blog Backend — Command-Line Entry Point
========================================

Usage:
    python -m blog        (or the `blog-api` console script)

Binds to BACKEND_HOST:BACKEND_PORT (default 127.0.0.1:8000).
"""

import uvicorn

from blog.config import settings


def main() -> None:
    uvicorn.run(
        "blog.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
