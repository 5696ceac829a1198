# forum/api/votes/routes.py
from flask import Blueprint, jsonify, current_app

from forum.api.votes.schemas import VoteResponseSchema
from forum.core.identity import current_viewer, login_required
from forum.models.post import VoteDirection

votes_bp = Blueprint('votes_bp', __name__)


def _vote(post_id: str, direction: VoteDirection):
    result = current_app.services['votes'].apply_vote(post_id, current_viewer().user_id, direction)
    return jsonify(VoteResponseSchema().dump(result)), 200


@votes_bp.route('/post/<string:post_id>/upvote', methods=['POST'])
@login_required
def upvote(post_id: str):
    """추천. 이미 추천한 상태라면 추천을 취소하고, 비추천 상태였다면 추천으로 바꿉니다."""
    return _vote(post_id, VoteDirection.UP)


@votes_bp.route('/post/<string:post_id>/downvote', methods=['POST'])
@login_required
def downvote(post_id: str):
    """비추천. 동작 방식은 추천과 대칭입니다."""
    return _vote(post_id, VoteDirection.DOWN)
