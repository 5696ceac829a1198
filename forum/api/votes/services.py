# forum/api/votes/services.py
import logging
from dataclasses import dataclass
from typing import Optional

from forum.core.errors import NotFoundError
from forum.models.post import Post, VoteDirection
from forum.services.document_store import POSTS


@dataclass
class VoteResult:
    upvotes: int
    downvotes: int
    user_vote: Optional[str]


class VoteService:
    """
    게시글의 upvotes/downvotes 투표자 목록을 관리합니다.
    한 사용자의 ID는 두 목록 중 최대 한 곳에만 존재합니다.
    """
    def __init__(self, store):
        self.store = store

    def apply_vote(self, post_id: str, user_id: str, direction: VoteDirection) -> VoteResult:
        """
        토글 방식 투표.
        - 같은 방향으로 이미 투표했다면 취소합니다.
        - 아니면 해당 방향 목록에 추가하고 반대 방향 목록에서는 같은 쓰기로 제거합니다.
        """
        data = self.store.find_by_id(POSTS, post_id)
        if not data:
            raise NotFoundError("게시글을 찾을 수 없습니다.")
        post = Post.from_dict(data)

        field_name = direction.field_name
        already_voted = user_id in getattr(post, field_name)

        if already_voted:
            self.store.modify(POSTS, post_id, pull={field_name: [user_id]})
            user_vote = None
        else:
            self.store.modify(POSTS, post_id,
                              add_to_set={field_name: [user_id]},
                              pull={direction.opposite.field_name: [user_id]})
            user_vote = direction.value

        updated = self.store.find_by_id(POSTS, post_id)
        if not updated:
            raise NotFoundError("게시글을 찾을 수 없습니다.")
        updated_post = Post.from_dict(updated)

        logging.info(f"투표 처리 완료 (post_id: {post_id}, user_id: {user_id}, "
                     f"direction: {direction.value}, retracted: {already_voted})")
        return VoteResult(
            upvotes=updated_post.upvote_count,
            downvotes=updated_post.downvote_count,
            user_vote=user_vote
        )
