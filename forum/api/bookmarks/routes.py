# forum/api/bookmarks/routes.py
from flask import Blueprint, jsonify, current_app

from forum.api.posts.schemas import PostResponseSchema
from forum.core.identity import current_viewer, login_required

bookmarks_bp = Blueprint('bookmarks_bp', __name__)


@bookmarks_bp.route('/post/<string:post_id>/bookmark', methods=['POST'])
@login_required
def toggle_bookmark(post_id: str):
    """게시글을 저장하거나 저장을 취소합니다."""
    is_bookmarked = current_app.services['bookmarks'].toggle_bookmark(post_id, current_viewer().user_id)
    message = "게시글을 저장했습니다." if is_bookmarked else "게시글 저장을 취소했습니다."
    return jsonify({"isBookmarked": is_bookmarked, "message": message}), 200


@bookmarks_bp.route('/saved', methods=['GET'])
@login_required
def list_saved_posts():
    """저장한 게시글 목록 (저장한 순서)"""
    viewer = current_viewer()
    posts = current_app.services['bookmarks'].list_bookmarked_posts(viewer.user_id)
    views = current_app.services['feed'].annotate(posts, viewer)
    return jsonify({"posts": PostResponseSchema(many=True).dump(views)}), 200
