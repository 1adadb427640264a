"""파일별 결과와 실행 전체 통계."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ExecutionResult(BaseModel):
    """executor가 파일 하나를 인코딩/저장한 결과."""

    model_config = ConfigDict(frozen=True)

    destination: Path
    size_bytes: int
    width: int
    height: int
    format: str
    watermarked: bool = False


class FileResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    status: Literal["succeeded", "errored", "skipped"]
    input_bytes: int = 0
    output_bytes: int = 0
    format: str | None = None
    watermarked: bool = False
    message: str | None = None


class RunStatistics(BaseModel):
    """배치 실행 누적 통계.

    orchestrator만 갱신한다 (single writer). 실행이 끝나면 리포트 렌더링에
    한 번 사용된다.
    """

    processed: int = 0
    succeeded: int = 0
    errored: int = 0
    skipped: int = 0
    watermarked: int = 0
    input_bytes: int = 0
    output_bytes: int = 0
    format_counts: dict[str, int] = Field(default_factory=dict)
    elapsed: float = 0.0

    def record_success(self, result: FileResult) -> None:
        self.processed += 1
        self.succeeded += 1
        self.input_bytes += result.input_bytes
        self.output_bytes += result.output_bytes
        if result.format:
            self.format_counts[result.format] = self.format_counts.get(result.format, 0) + 1
        if result.watermarked:
            self.watermarked += 1

    def record_error(self) -> None:
        self.errored += 1

    def record_skip(self) -> None:
        self.skipped += 1

    def record(self, result: FileResult) -> None:
        if result.status == "succeeded":
            self.record_success(result)
        elif result.status == "errored":
            self.record_error()
        else:
            self.record_skip()

    @property
    def total(self) -> int:
        return self.succeeded + self.errored + self.skipped

    @property
    def saved_bytes(self) -> int:
        return self.input_bytes - self.output_bytes

    @property
    def reduction_percent(self) -> float:
        if self.input_bytes <= 0:
            return 0.0
        return self.saved_bytes / self.input_bytes * 100

    @property
    def average_seconds(self) -> float:
        if self.processed == 0:
            return 0.0
        return self.elapsed / self.processed
