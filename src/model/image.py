from dataclasses import dataclass
from pathlib import Path

from PIL import Image


@dataclass(frozen=True)
class SourceImage:
    """디코딩된 입력 파일 하나.

    width/height는 EXIF orientation을 반영한 "똑바로 선" 기준 크기다.
    파일 하나를 처리하는 동안만 살아 있고, 파일 간에 재사용하지 않는다.
    """

    path: Path
    image: Image.Image
    width: int
    height: int
    has_alpha: bool
    format: str
    size_bytes: int = 0
