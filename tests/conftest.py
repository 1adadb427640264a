"""pytest 공용 fixture.

- 이미지는 모두 Pillow로 메모리/tmp_path에 생성한다.
- client: 설정을 tmp 디렉토리로 바꾼 TestClient
- requires_cairo: libcairo가 없는 환경에서는 SVG 래스터화 테스트를 건너뛴다
"""

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from PIL import Image

# src/ 디렉토리를 import path에 추가
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from core.config import settings
from main import app
from model.config import ProcessingConfig, ResizeConfig


def _cairo_available() -> bool:
    try:
        import cairosvg  # noqa: F401
    except (ImportError, OSError):
        return False
    return True


requires_cairo = pytest.mark.skipif(not _cairo_available(), reason="libcairo not available")


def write_image(
    path: Path,
    size: tuple[int, int] = (100, 100),
    mode: str = "RGB",
    color=(200, 30, 30),
    **save_params,
) -> Path:
    """테스트용 이미지 파일을 만든다. 포맷은 확장자로 결정된다."""
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new(mode, size, color).save(path, **save_params)
    return path


def make_config(**overrides) -> ProcessingConfig:
    """리사이즈/샤픈을 끈 기본 설정에서 필요한 값만 바꾼다."""
    values = {
        "output_format": "jpeg",
        "resize": ResizeConfig(enabled=False),
    }
    values.update(overrides)
    return ProcessingConfig(**values)


@pytest.fixture()
def input_dir(tmp_path):
    path = tmp_path / "input"
    path.mkdir()
    return path


@pytest.fixture()
def output_dir(tmp_path):
    return tmp_path / "output"


@pytest.fixture()
def client(input_dir, output_dir, monkeypatch):
    """INPUT_DIR / OUTPUT_DIR을 tmp로 바꾼 TestClient."""
    monkeypatch.setattr(settings, "INPUT_DIR", str(input_dir))
    monkeypatch.setattr(settings, "OUTPUT_DIR", str(output_dir))
    monkeypatch.setattr(settings, "RESIZE", ResizeConfig(enabled=False))
    with TestClient(app) as c:
        yield c
