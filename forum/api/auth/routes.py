# forum/api/auth/routes.py

import logging
from flask import Blueprint, request, jsonify, current_app
from flask_jwt_extended import get_jwt, set_access_cookies, unset_jwt_cookies

from forum.api.auth.schemas import SignupSchema, LoginSchema, ViewerResponseSchema
from forum.core.identity import current_viewer, login_required
from forum.core.security import issue_access_token

auth_bp = Blueprint('auth_bp', __name__)


@auth_bp.route('/signup', methods=['POST'])
def signup():
    """회원가입. 사용자 이름과 이메일은 모두 중복될 수 없습니다."""
    auth_service = current_app.services['auth']
    data = SignupSchema().load(request.get_json(silent=True) or {})
    user = auth_service.register(data['username'], data['email'], data['password'])
    return jsonify({"message": "회원가입이 완료되었습니다.", "user_id": user.user_id}), 201


@auth_bp.route('/login', methods=['POST'])
def login():
    """
    로그인. Access Token을 본문으로 반환하고 'token' 쿠키에도 설정합니다.
    rememberMe가 켜져 있으면 쿠키와 토큰이 30일 동안 유지됩니다.
    """
    auth_service = current_app.services['auth']
    data = LoginSchema().load(request.get_json(silent=True) or {})
    user = auth_service.authenticate(data['username'], data['password'])
    access_token, expires = issue_access_token(user, remember_me=data['remember_me'])

    response = jsonify({
        "message": "로그인되었습니다.",
        "access_token": access_token,
        "user_id": user.user_id,
        "username": user.username
    })
    set_access_cookies(response, access_token, max_age=int(expires.total_seconds()))
    logging.info(f"로그인 성공 (user_id: {user.user_id}, remember_me: {data['remember_me']})")
    return response, 200


# --- 로그아웃 엔드포인트 ---
@auth_bp.route('/logout', methods=['POST'])
def logout():
    """로그아웃. 현재 토큰을 무효화 목록에 추가하고 쿠키를 지웁니다."""
    if current_viewer().is_authenticated:
        jwt_payload = get_jwt()
        current_app.services['auth'].revoke_token(jwt_payload['jti'], jwt_payload['exp'])

    response = jsonify({"message": "로그아웃 되었습니다."})
    unset_jwt_cookies(response)
    return response, 200


@auth_bp.route('/me', methods=['GET'])
@login_required
def me():
    return jsonify(ViewerResponseSchema().dump(current_viewer())), 200
