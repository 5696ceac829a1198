# forum/api/feed/services.py
"""
게시글 목록/상세 응답을 조립하는 서비스.

게시글 문서에 작성자 정보, 투표/댓글 수, 그리고 현재 Viewer 기준의
userVote / isBookmarked 값을 붙입니다. 이 서비스는 저장소에 쓰지 않습니다.
"""
from typing import Any, Dict, Iterable, List, Optional

from forum.api.comments.services import CommentService
from forum.api.users.services import UserService
from forum.core.errors import NotFoundError
from forum.models.post import Post
from forum.models.viewer import Viewer
from forum.services.document_store import POSTS, DESCENDING

NEWEST_FIRST = [('created_at', DESCENDING)]


class FeedService:
    def __init__(self, store, user_service: UserService, comment_service: CommentService,
                 page_size: int = 15, search_limit: int = 20, search_scan_limit: int = 500):
        self.store = store
        self.user_service = user_service
        self.comment_service = comment_service
        self.page_size = page_size
        self.search_limit = search_limit
        self.search_scan_limit = search_scan_limit

    def _recent_posts(self, offset: int = 0, limit: Optional[int] = None) -> List[Post]:
        docs = self.store.find(POSTS, order_by=NEWEST_FIRST, offset=offset, limit=limit)
        return [Post.from_dict(d) for d in docs]

    def _offset(self, page: int) -> int:
        return (max(page, 1) - 1) * self.page_size

    def annotate(self, posts: Iterable[Post], viewer: Viewer) -> List[Dict[str, Any]]:
        """각 게시글을 작성자/카운트/Viewer 기준 상태가 포함된 딕셔너리로 변환합니다."""
        posts = list(posts)
        authors = self.user_service.author_summaries({post.user_id for post in posts})
        views = []
        for post in posts:
            view = post.to_dict()
            view.update({
                'author': authors.get(post.user_id),
                'upvote_count': post.upvote_count,
                'downvote_count': post.downvote_count,
                'comment_count': post.comment_count,
                'user_vote': viewer.user_vote(post),
                'is_bookmarked': viewer.has_bookmarked(post.post_id),
            })
            views.append(view)
        return views

    def home_feed(self, viewer: Viewer) -> List[Dict[str, Any]]:
        """
        홈 피드 (최신순).
        익명 사용자는 첫 페이지만, 로그인한 사용자는 제한 없이 전체 게시글을 받습니다.
        """
        limit = None if viewer.is_authenticated else self.page_size
        return self.annotate(self._recent_posts(limit=limit), viewer)

    def list_page(self, page: int, viewer: Viewer) -> List[Dict[str, Any]]:
        """페이지 단위 최신순 목록 (/api/posts)."""
        posts = self._recent_posts(offset=self._offset(page), limit=self.page_size)
        return self.annotate(posts, viewer)

    def trending(self, viewer: Viewer, page: Optional[int] = None) -> List[Dict[str, Any]]:
        """
        추천 수 내림차순, 같으면 최신순으로 정렬합니다.
        Firestore는 배열 길이로 정렬할 수 없으므로 최신순으로 읽은 뒤 안정 정렬합니다.
        """
        posts = sorted(self._recent_posts(), key=lambda post: post.upvote_count, reverse=True)
        if page is not None:
            start = self._offset(page)
            posts = posts[start:start + self.page_size]
        return self.annotate(posts, viewer)

    def search(self, viewer: Viewer, query: Optional[str] = None,
               tag: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        - tag: 태그가 정확히 일치하는 게시글
        - query: 최근 게시글의 제목/본문에 대한 대소문자 무시 부분 문자열 검색
        둘 다 없으면 빈 목록을 반환합니다.
        """
        tag = (tag or '').strip()
        query = (query or '').strip()
        if tag:
            docs = self.store.find(POSTS, filters=[('tags', 'array_contains', tag)],
                                   order_by=NEWEST_FIRST, limit=self.search_limit)
            posts = [Post.from_dict(d) for d in docs]
        elif query:
            needle = query.casefold()
            posts = [
                post for post in self._recent_posts(limit=self.search_scan_limit)
                if needle in post.title.casefold() or needle in post.content.casefold()
            ][:self.search_limit]
        else:
            return []
        return self.annotate(posts, viewer)

    def post_detail(self, post_id: str, viewer: Viewer) -> Dict[str, Any]:
        data = self.store.find_by_id(POSTS, post_id)
        if not data:
            raise NotFoundError("게시글을 찾을 수 없습니다.")
        post = Post.from_dict(data)
        view = self.annotate([post], viewer)[0]
        view['is_author'] = viewer.user_id == post.user_id
        view['comment_tree'] = self.comment_service.get_comment_tree(post)
        return view
