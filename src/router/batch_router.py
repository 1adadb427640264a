from pathlib import Path

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field

from core.config import MAX_WORKERS
from model.config import ProcessingConfig
from model.stats import RunStatistics
from service.batch_service import run_batch

router = APIRouter(prefix="/api/batch", tags=["batch"])


class RunRequest(BaseModel):
    input_dir: str | None = None
    output_dir: str | None = None
    workers: int | None = Field(default=None, ge=1, le=MAX_WORKERS)


class RunResponse(BaseModel):
    input_dir: str
    output_dir: str
    stats: RunStatistics
    reduction_percent: float
    average_seconds: float


@router.get("/config", response_model=ProcessingConfig)
def get_config(request: Request):
    return request.app.state.processing_config


@router.post("/run", response_model=RunResponse)
def run(request: Request, req: RunRequest | None = None):
    """배치를 동기로 실행하고 통계를 반환한다.

    입력 디렉토리를 읽을 수 없으면 InputDirectoryError → 전역 핸들러가 404로 변환.
    """
    req = req or RunRequest()
    settings = request.app.state.settings
    input_dir = Path(req.input_dir or settings.INPUT_DIR)
    output_dir = Path(req.output_dir or settings.OUTPUT_DIR)

    stats = run_batch(
        input_dir,
        output_dir,
        request.app.state.processing_config,
        workers=req.workers or settings.WORKERS,
    )
    return RunResponse(
        input_dir=str(input_dir),
        output_dir=str(output_dir),
        stats=stats,
        reduction_percent=round(stats.reduction_percent, 2),
        average_seconds=round(stats.average_seconds, 3),
    )
