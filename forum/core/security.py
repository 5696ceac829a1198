# forum/core/security.py
from datetime import timedelta
from typing import Tuple

from flask import current_app
from flask_jwt_extended import create_access_token
from werkzeug.security import generate_password_hash, check_password_hash

from forum.models.user import User


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(password_hash: str, password: str) -> bool:
    if not password_hash or password is None:
        return False
    return check_password_hash(password_hash, password)


def issue_access_token(user: User, remember_me: bool = False) -> Tuple[str, timedelta]:
    """
    로그인한 사용자에게 Access Token을 발급합니다.
    rememberMe가 켜져 있으면 30일, 아니면 1일 동안 유효합니다.
    """
    if remember_me:
        expires = current_app.config['REMEMBER_ME_EXPIRES']
    else:
        expires = current_app.config['JWT_ACCESS_TOKEN_EXPIRES']
    token = create_access_token(
        identity=user.user_id,
        additional_claims={'username': user.username},
        expires_delta=expires
    )
    return token, expires
