"""Run the FastAPI application with uvicorn."""

import uvicorn
import sys

from app.utils.config import get_settings


if __name__ == "__main__":
    settings = get_settings()
    try:
        uvicorn.run(
            "app.main:app",
            host=settings.api_host,
            port=settings.api_port,
            reload=settings.debug,
            log_level=settings.log_level.lower(),
        )
    except KeyboardInterrupt:
        print("\n👋 Server stopped gracefully")
        sys.exit(0)
