"""Run the API with uvicorn.

Usage:
    python -m backend.serve
"""
import uvicorn

from backend.core import config


if __name__ == "__main__":
    uvicorn.run("backend.main:app", host=config.HOST, port=config.PORT, log_level=config.LOG_LEVEL.lower())
