import uvicorn
from fastapi import FastAPI

from core.config import settings
from core.error_handlers import app_exception_handler
from core.exceptions import AppException
from core.lifespan import lifespan
from processor.formats import INPUT_EXTENSIONS, SUPPORTED_OUTPUTS
from router.batch_router import router as batch_router

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Batch image resize / optimize / watermark",
    lifespan=lifespan,
)

app.add_exception_handler(AppException, app_exception_handler)

app.include_router(batch_router)


@app.get("/health")
async def health():
    return {
        "status": "ok",
        "python_version": settings.python_version,
        "input_formats": sorted(INPUT_EXTENSIONS),
        "output_formats": list(SUPPORTED_OUTPUTS),
    }


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
