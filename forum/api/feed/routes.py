# forum/api/feed/routes.py
from flask import Blueprint, request, jsonify, current_app

from forum.api.posts.schemas import PostResponseSchema
from forum.core.identity import current_viewer

feed_bp = Blueprint('feed_bp', __name__)


def _page_arg() -> int:
    return max(request.args.get('page', 1, type=int), 1)


def _posts_response(views, **extra):
    body = {"posts": PostResponseSchema(many=True).dump(views)}
    body.update(extra)
    return jsonify(body), 200


@feed_bp.route('/', methods=['GET'])
def home():
    """홈 피드. 익명 사용자는 최신 15개, 로그인한 사용자는 전체 게시글을 받습니다."""
    return _posts_response(current_app.services['feed'].home_feed(current_viewer()))


@feed_bp.route('/api/posts', methods=['GET'])
def list_posts():
    page = _page_arg()
    return _posts_response(current_app.services['feed'].list_page(page, current_viewer()), page=page)


@feed_bp.route('/trending', methods=['GET'])
def trending():
    return _posts_response(current_app.services['feed'].trending(current_viewer()))


@feed_bp.route('/api/trending', methods=['GET'])
def list_trending():
    page = _page_arg()
    return _posts_response(current_app.services['feed'].trending(current_viewer(), page=page), page=page)


@feed_bp.route('/search', methods=['GET'])
def search():
    """?q= 제목/본문 부분 문자열 검색, ?tag= 태그 검색"""
    query = request.args.get('q', '', type=str)
    tag = request.args.get('tag', '', type=str)
    views = current_app.services['feed'].search(current_viewer(), query=query, tag=tag)
    return _posts_response(views, query=query, tag=tag)
