# forum/api/comments/routes.py
from flask import Blueprint, request, jsonify, current_app

from forum.api.comments.schemas import (
    CommentCreateSchema, CommentUpdateSchema, CommentResponseSchema, CommentTreeSchema
)
from forum.core.identity import current_viewer, login_required

comments_bp = Blueprint('comments_bp', __name__)


@comments_bp.route('/comment', methods=['POST'])
@login_required
def create_comment():
    """
    게시글에 댓글을, 또는 parentCommentId가 주어지면 해당 댓글에 답글을 작성합니다.
    응답에는 화면에 바로 표시할 수 있도록 작성자 정보가 포함됩니다.
    """
    comment_service = current_app.services['comments']
    data = CommentCreateSchema().load(request.get_json(silent=True) or {})
    comment = comment_service.create_comment(
        data['post_id'], current_viewer().user_id, data['content'], data['parent_comment_id']
    )
    return jsonify({"success": True, "comment": CommentResponseSchema().dump(comment)}), 201


@comments_bp.route('/comment/<string:comment_id>', methods=['GET'])
def get_comment(comment_id: str):
    comment = current_app.services['comments'].get_comment(comment_id)
    return jsonify(CommentResponseSchema().dump(comment)), 200


@comments_bp.route('/comment/<string:comment_id>', methods=['PUT'])
@login_required
def edit_comment(comment_id: str):
    """댓글을 수정합니다. (작성자 본인만 가능)"""
    comment_service = current_app.services['comments']
    data = CommentUpdateSchema().load(request.get_json(silent=True) or {})
    comment = comment_service.edit_comment(comment_id, current_viewer().user_id, data['content'])
    return jsonify({"success": True, "comment": CommentResponseSchema().dump(comment)}), 200


@comments_bp.route('/comment/<string:comment_id>', methods=['DELETE'])
@login_required
def delete_comment(comment_id: str):
    """
    댓글을 삭제합니다. (작성자 본인만 가능)
    이 댓글에 달린 답글은 삭제되지 않습니다.
    """
    current_app.services['comments'].delete_comment(comment_id, current_viewer().user_id)
    return jsonify({"success": True, "message": "댓글이 삭제되었습니다."}), 200


@comments_bp.route('/post/<string:post_id>/comments', methods=['GET'])
def get_comment_tree(post_id: str):
    """특정 게시글의 댓글을 답글까지 중첩된 트리 형태로 조회합니다."""
    post = current_app.services['posts'].get_post(post_id)
    tree = current_app.services['comments'].get_comment_tree(post)
    return jsonify({"comments": CommentTreeSchema(many=True).dump(tree)}), 200
