"""앱 전역 커스텀 예외 클래스.

AppException을 상속하면 전역 핸들러(error_handlers.py)가 자동으로
{"error_code": "...", "message": "..."} 형식의 JSON 응답을 생성한다.
배치 실행에서는 ImageProcessingError 계열이 파일 단위 실패 경계다.
"""


class AppException(Exception):
    """앱 전역 베이스 예외.

    서브클래스에서 status_code, error_code, message를 클래스 변수로 정의하면
    전역 핸들러가 해당 값을 읽어 HTTP 응답을 생성한다.
    """

    status_code: int = 500
    error_code: str = "INTERNAL_ERROR"
    message: str = "서버 내부 오류가 발생했습니다"

    def __init__(self, message: str | None = None):
        if message:
            self.message = message
        super().__init__(self.message)


# --- 실행 전체 (치명적) ---


class InputDirectoryError(AppException):
    """입력 디렉토리 자체를 읽을 수 없음. 실행 전체를 중단한다."""

    status_code = 404
    error_code = "INPUT_DIRECTORY_UNAVAILABLE"
    message = "입력 디렉토리를 읽을 수 없습니다"


# --- 파일 단위 실패 ---


class ImageProcessingError(AppException):
    """파일 하나의 처리 실패. 배치 루프에서 잡고 다음 파일로 넘어간다."""

    status_code = 422
    error_code = "IMAGE_PROCESSING_FAILED"
    message = "이미지 처리에 실패했습니다"


class DecodeFailure(ImageProcessingError):
    error_code = "DECODE_FAILURE"
    message = "이미지를 디코딩할 수 없습니다"


class TransformFailure(ImageProcessingError):
    error_code = "TRANSFORM_FAILURE"
    message = "이미지 변환에 실패했습니다"


class EncodeFailure(ImageProcessingError):
    error_code = "ENCODE_FAILURE"
    message = "이미지를 인코딩할 수 없습니다"


# --- 워터마크 (파일 실패 아님) ---


class WatermarkAssetMissing(AppException):
    """워터마크 이미지 파일 없음. 워터마크만 건너뛰고 처리는 계속한다."""

    status_code = 404
    error_code = "WATERMARK_ASSET_MISSING"
    message = "워터마크 이미지 파일을 찾을 수 없습니다"
