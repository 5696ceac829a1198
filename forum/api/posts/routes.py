# forum/api/posts/routes.py
from flask import Blueprint, request, jsonify, current_app

from forum.api.feed.schemas import PostDetailResponseSchema
from forum.api.posts.schemas import PostCreateSchema, PostUpdateSchema, PostResponseSchema
from forum.core.identity import current_viewer, login_required

posts_bp = Blueprint('posts_bp', __name__)


@posts_bp.route('', methods=['POST'])
@login_required
def create_post():
    """
    새 게시글을 작성합니다.
    - 본문은 허용된 태그만 남기고 정리되며, 첫 번째 이미지가 대표 이미지가 됩니다.
    - 성공 시 생성된 게시글을 201 Created 상태 코드와 함께 반환합니다.
    """
    viewer = current_viewer()
    data = PostCreateSchema().load(request.get_json(silent=True) or {})
    post = current_app.services['posts'].create_post(viewer.user_id, data['title'], data['content'], data['tags'])
    view = current_app.services['feed'].annotate([post], viewer)[0]
    return jsonify(PostResponseSchema().dump(view)), 201


@posts_bp.route('/<string:post_id>', methods=['GET'])
def get_post(post_id: str):
    """게시글 상세 정보와 중첩된 댓글 트리를 조회합니다."""
    detail = current_app.services['feed'].post_detail(post_id, current_viewer())
    return jsonify(PostDetailResponseSchema().dump(detail)), 200


@posts_bp.route('/<string:post_id>', methods=['PUT'])
@login_required
def update_post(post_id: str):
    """게시글을 수정합니다. (작성자 본인만 가능)"""
    viewer = current_viewer()
    data = PostUpdateSchema().load(request.get_json(silent=True) or {})
    post = current_app.services['posts'].update_post(
        post_id, viewer.user_id,
        title=data.get('title'),
        content=data.get('content'),
        tags=data.get('tags')
    )
    view = current_app.services['feed'].annotate([post], viewer)[0]
    return jsonify(PostResponseSchema().dump(view)), 200


@posts_bp.route('/<string:post_id>', methods=['DELETE'])
@login_required
def delete_post(post_id: str):
    """게시글을 삭제합니다. (작성자 본인만 가능) 댓글은 함께 삭제되지 않습니다."""
    current_app.services['posts'].delete_post(post_id, current_viewer().user_id)
    return jsonify({"success": True, "message": "게시글이 삭제되었습니다."}), 200
