# forum/core/errors.py
"""
포럼 도메인 예외 계층.

각 예외는 HTTP 상태 코드와 기계가 읽을 수 있는 error_code를 함께 들고 다니며,
create_app에 등록된 에러 핸들러가 `{"error", "message", "details"?}` 형태로 변환합니다.
"""
from typing import Any, Optional


class ForumError(Exception):
    """포럼 서비스 관련 기본 예외 클래스"""

    status_code = 500
    error_code = "INTERNAL_SERVER_ERROR"
    default_message = "서버 내부에서 예상치 못한 오류가 발생했습니다."

    def __init__(self, message: Optional[str] = None, details: Any = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> dict:
        body = {"error": self.error_code, "message": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class NotFoundError(ForumError):
    """게시글/댓글/사용자 ID가 존재하지 않을 때 발생하는 예외"""

    status_code = 404
    error_code = "NOT_FOUND"
    default_message = "요청한 리소스를 찾을 수 없습니다."


class AuthRequiredError(ForumError):
    """로그인이 필요한 작업을 익명 사용자가 요청했을 때 발생하는 예외"""

    status_code = 401
    error_code = "AUTH_REQUIRED"
    default_message = "로그인이 필요합니다."


class ForbiddenError(ForumError):
    """로그인은 했지만 리소스 소유자가 아닐 때 발생하는 예외"""

    status_code = 403
    error_code = "FORBIDDEN"
    default_message = "권한이 없습니다."


class InputValidationError(ForumError):
    """필수 필드 누락 등 잘못된 입력일 때 발생하는 예외"""

    status_code = 400
    error_code = "VALIDATION_ERROR"
    default_message = "요청 데이터가 올바르지 않습니다."


class StoreError(ForumError):
    """문서 저장소(Firestore) 호출이 실패했을 때 발생하는 예외"""

    status_code = 500
    error_code = "STORE_ERROR"
    default_message = "데이터 저장소 처리 중 오류가 발생했습니다."
