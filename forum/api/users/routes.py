# forum/api/users/routes.py
from flask import Blueprint, request, jsonify, current_app

from forum.api.users.schemas import UserPublicResponseSchema, ProfileUpdateSchema
from forum.core.identity import current_viewer, login_required

users_bp = Blueprint('users_bp', __name__)


@users_bp.route('/<string:username>', methods=['GET'])
def get_user_profile(username: str):
    """특정 사용자의 공개 프로필과 작성한 게시글 목록을 조회합니다."""
    user_service = current_app.services['users']
    profile = user_service.get_profile(username)
    return jsonify(UserPublicResponseSchema().dump(profile)), 200


@users_bp.route('', methods=['GET'])
@login_required
def get_my_profile():
    user_service = current_app.services['users']
    profile = user_service.get_profile(current_viewer().username)
    return jsonify(UserPublicResponseSchema().dump(profile)), 200


@users_bp.route('', methods=['PATCH'])
@login_required
def update_my_profile():
    """
    현재 로그인된 사용자의 프로필을 수정합니다.
    전달된 필드만 변경되며, 응답은 수정된 공개 프로필입니다.
    """
    user_service = current_app.services['users']
    changes = ProfileUpdateSchema().load(request.get_json(silent=True) or {})
    updated_user = user_service.update_profile(current_viewer().user_id, changes)
    profile = user_service.get_profile(updated_user.username)
    return jsonify(UserPublicResponseSchema().dump(profile)), 200
