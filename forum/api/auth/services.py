# forum/api/auth/services.py
import uuid
import logging
from datetime import datetime, timezone

from forum.api.users.services import UserService
from forum.core.errors import InputValidationError, AuthRequiredError
from forum.core.security import hash_password, verify_password
from forum.models.user import User
from forum.services.document_store import USERS, REVOKED_TOKENS
from forum.utils.datetime_utils import DateTimeUtils


class AuthService:
    """회원가입, 로그인 검증, 로그아웃 토큰 폐기(Blocklist)를 담당합니다."""

    def __init__(self, store, user_service: UserService):
        self.store = store
        self.user_service = user_service

    def register(self, username: str, email: str, password: str) -> User:
        username = username.strip()
        email = email.strip().lower()
        if self.user_service.find_by_username(username) or self.user_service.find_by_email(email):
            raise InputValidationError("이미 존재하는 사용자입니다.")

        new_user = User(
            user_id=str(uuid.uuid4()),
            username=username,
            email=email,
            password_hash=hash_password(password)
        )
        self.store.save(USERS, new_user.user_id, new_user.to_dict())
        logging.info(f"회원가입 완료 (user_id: {new_user.user_id}, username: {username})")
        return new_user

    def authenticate(self, username: str, password: str) -> User:
        user = self.user_service.find_by_username(username.strip())
        if not user or not verify_password(user.password_hash, password):
            raise AuthRequiredError("사용자 이름 또는 비밀번호가 올바르지 않습니다.")
        return user

    # --- Blocklist 관련 로직 ---
    def revoke_token(self, jti: str, expires_at: int):
        """로그아웃한 토큰의 jti를 만료 시간과 함께 저장합니다."""
        token_data = {
            'jti': jti,
            'revoked_at': DateTimeUtils.now(),
            'expires_at': datetime.fromtimestamp(expires_at, tz=timezone.utc)
        }
        self.store.save(REVOKED_TOKENS, jti, token_data)
        logging.info(f"토큰 폐기 완료. JTI: {jti[:8]}...")

    def is_token_revoked(self, jwt_payload: dict) -> bool:
        jti = jwt_payload.get('jti')
        if not jti:
            return False
        return self.store.find_by_id(REVOKED_TOKENS, jti) is not None
