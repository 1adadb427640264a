from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from loguru import logger

from core.config import settings
from utility.logger import setup_logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    # === 시작 ===
    setup_logger(settings.LOG_LEVEL, settings.LOG_FILE)
    logger.info(f"{settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"Python {settings.python_version}")

    Path(settings.OUTPUT_DIR).mkdir(parents=True, exist_ok=True)
    logger.info(f"Input: {settings.INPUT_DIR} → Output: {settings.OUTPUT_DIR}")

    app.state.settings = settings
    app.state.processing_config = settings.processing_config()

    yield

    # === 종료 ===
    logger.info("Shutting down")
