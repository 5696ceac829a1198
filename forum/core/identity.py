# forum/core/identity.py
"""
요청의 인증 정보(Bearer 토큰 또는 'token' 쿠키)를 Viewer로 변환합니다.

- 인증 정보가 없거나 유효하지 않으면 예외 없이 익명 Viewer를 돌려줍니다.
- 만료/위조/폐기된 토큰, 또는 더 이상 존재하지 않는 사용자의 토큰은 응답에서 쿠키를 지웁니다.
- 로그인이 필요한 작업은 login_required 데코레이터가 AuthRequiredError로 거부합니다.
"""
import logging
from functools import wraps

from flask import Flask, g, current_app
from flask_jwt_extended import verify_jwt_in_request, get_jwt_identity, unset_jwt_cookies
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt import PyJWTError

from forum.core.errors import AuthRequiredError, StoreError
from forum.models.viewer import Viewer


def resolve_viewer() -> Viewer:
    try:
        verify_jwt_in_request(optional=True)
    except (JWTExtendedException, PyJWTError) as e:
        logging.info(f"유효하지 않은 인증 정보를 폐기하고 익명으로 처리합니다: {type(e).__name__}")
        g.clear_credentials = True
        return Viewer.anonymous()
    except StoreError:
        logging.error("토큰 폐기 목록 조회 실패로 익명으로 처리합니다.")
        return Viewer.anonymous()

    user_id = get_jwt_identity()
    if not user_id:
        return Viewer.anonymous()

    try:
        user = current_app.services['users'].find_user(user_id)
    except StoreError:
        logging.error(f"Viewer 사용자 조회 실패로 익명으로 처리합니다 (user_id: {user_id})")
        return Viewer.anonymous()

    if user is None:
        logging.info(f"존재하지 않는 사용자의 토큰입니다. 익명으로 처리합니다 (user_id: {user_id})")
        g.clear_credentials = True
        return Viewer.anonymous()
    return Viewer.from_user(user)


def current_viewer() -> Viewer:
    return g.get('viewer') or Viewer.anonymous()


def login_required(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_viewer().is_authenticated:
            raise AuthRequiredError()
        return f(*args, **kwargs)

    return decorated_function


def init_identity(app: Flask):
    """모든 요청 전에 Viewer를 한 번 만들고, 필요하면 응답에서 오래된 쿠키를 지웁니다."""

    @app.before_request
    def load_viewer():
        g.viewer = resolve_viewer()

    @app.after_request
    def clear_stale_credentials(response):
        if g.get('clear_credentials'):
            unset_jwt_cookies(response)
        return response
