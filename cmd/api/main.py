"""
Furniture Estimator API entry point.

Usage:
    python cmd/api/main.py
"""
import uvicorn

from config.settings import get_settings
from internal.transport.http.app import create_app
from pkg.logger.logger import setup_logging


settings = get_settings()

setup_logging(
    level=settings.log_level,
    json_format=settings.json_logs,
)

app = create_app(settings)


if __name__ == "__main__":
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
    )
