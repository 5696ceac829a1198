# forum/api/bookmarks/services.py
import logging
from typing import List

from forum.core.errors import NotFoundError
from forum.models.post import Post
from forum.models.user import User
from forum.services.document_store import POSTS, USERS


class BookmarkService:
    """사용자의 bookmarked_posts 목록을 토글하고 저장한 게시글을 조회합니다."""

    def __init__(self, store):
        self.store = store

    def toggle_bookmark(self, post_id: str, user_id: str) -> bool:
        """북마크되어 있으면 제거, 아니면 추가합니다. 변경 후의 북마크 여부를 반환합니다."""
        user_data = self.store.find_by_id(USERS, user_id)
        if not user_data:
            raise NotFoundError("사용자를 찾을 수 없습니다.")

        # 게시글이 이미 삭제되었어도 남아 있는 북마크는 제거할 수 있어야 합니다.
        if post_id in User.from_dict(user_data).bookmarked_posts:
            self.store.pull(USERS, user_id, 'bookmarked_posts', post_id)
            is_bookmarked = False
        else:
            if not self.store.find_by_id(POSTS, post_id):
                raise NotFoundError("게시글을 찾을 수 없습니다.")
            self.store.add_to_set(USERS, user_id, 'bookmarked_posts', post_id)
            is_bookmarked = True

        logging.info(f"북마크 토글 완료 (post_id: {post_id}, user_id: {user_id}, bookmarked: {is_bookmarked})")
        return is_bookmarked

    def list_bookmarked_posts(self, user_id: str) -> List[Post]:
        """북마크한 순서대로 게시글을 반환합니다. 이미 삭제된 게시글은 건너뜁니다."""
        user_data = self.store.find_by_id(USERS, user_id)
        if not user_data:
            raise NotFoundError("사용자를 찾을 수 없습니다.")
        post_ids = User.from_dict(user_data).bookmarked_posts
        return [Post.from_dict(d) for d in self.store.find_by_ids(POSTS, post_ids)]
