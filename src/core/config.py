import sys

from pydantic import Field
from pydantic_settings import BaseSettings

from model.config import (
    OptimizationConfig,
    OutputFormat,
    ProcessingConfig,
    ResizeConfig,
    WatermarkConfig,
)


# 스레드풀 상한 (설정 / API 요청 공통)
MAX_WORKERS = 32


class Settings(BaseSettings):
    # 앱 설정
    APP_NAME: str = "image-batch"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str | None = None

    # 서버 설정
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # 파일 경로
    INPUT_DIR: str = "./input"
    OUTPUT_DIR: str = "./output"

    # 1이면 순차 처리, 2 이상이면 스레드풀
    WORKERS: int = Field(default=1, ge=1, le=MAX_WORKERS)

    # 출력 인코딩
    OUTPUT_FORMAT: OutputFormat = "jpeg"
    QUALITY: int = Field(default=80, ge=1, le=100)
    FLATTEN_BACKGROUND: str = "#ffffff"

    # 변환 / 워터마크 (중첩: RESIZE__WIDTH=800, WATERMARK__ENABLED=true ...)
    RESIZE: ResizeConfig = ResizeConfig()
    OPTIMIZATIONS: OptimizationConfig = OptimizationConfig()
    WATERMARK: WatermarkConfig = WatermarkConfig()

    @property
    def python_version(self) -> str:
        return f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}"

    def processing_config(self) -> ProcessingConfig:
        """호출 체인에 넘길 불변 설정 객체를 만든다."""
        return ProcessingConfig(
            output_format=self.OUTPUT_FORMAT,
            quality=self.QUALITY,
            resize=self.RESIZE,
            optimizations=self.OPTIMIZATIONS,
            watermark=self.WATERMARK,
            flatten_background=self.FLATTEN_BACKGROUND,
        )

    model_config = {"env_file": ".env", "extra": "ignore", "env_nested_delimiter": "__"}


settings = Settings()
