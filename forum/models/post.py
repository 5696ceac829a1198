# forum/models/post.py
from dataclasses import dataclass, field, fields, asdict
from datetime import datetime
from enum import Enum
from typing import Optional, List, Dict, Any

from forum.utils.datetime_utils import DateTimeUtils


class VoteDirection(Enum):
    """게시글 투표 방향. 값은 응답의 userVote 문자열과 같습니다."""
    UP = "upvote"
    DOWN = "downvote"

    @property
    def field_name(self) -> str:
        """이 방향의 투표자 ID가 저장되는 Post 필드 이름"""
        return 'upvotes' if self is VoteDirection.UP else 'downvotes'

    @property
    def opposite(self) -> "VoteDirection":
        return VoteDirection.DOWN if self is VoteDirection.UP else VoteDirection.UP


@dataclass
class Post:
    """
    Firestore 'posts' 컬렉션의 문서 구조를 정의하는 데이터클래스.
    upvotes/downvotes에는 사용자 ID가, comments에는 최상위 댓글 ID만 저장됩니다.
    """
    post_id: str
    user_id: str
    title: str
    content: str
    tags: List[str] = field(default_factory=list)
    image: Optional[str] = None
    upvotes: List[str] = field(default_factory=list)
    downvotes: List[str] = field(default_factory=list)
    comments: List[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=DateTimeUtils.now)
    updated_at: datetime = field(default_factory=DateTimeUtils.now)

    @property
    def upvote_count(self) -> int:
        return len(self.upvotes)

    @property
    def downvote_count(self) -> int:
        return len(self.downvotes)

    @property
    def comment_count(self) -> int:
        return len(self.comments)

    def vote_of(self, user_id: Optional[str]) -> Optional[VoteDirection]:
        """사용자의 현재 투표 방향을 반환합니다. 투표하지 않았거나 익명이면 None."""
        if not user_id:
            return None
        if user_id in self.upvotes:
            return VoteDirection.UP
        if user_id in self.downvotes:
            return VoteDirection.DOWN
        return None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Post":
        known = {f.name for f in fields(cls)}
        processed_data = {k: v for k, v in data.items() if k in known}
        for list_field in ('tags', 'upvotes', 'downvotes', 'comments'):
            if processed_data.get(list_field) is None:
                processed_data[list_field] = []
        return cls(**processed_data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
