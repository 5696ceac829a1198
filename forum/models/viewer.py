# forum/models/viewer.py
from dataclasses import dataclass
from typing import Optional, FrozenSet

from forum.models.post import Post
from forum.models.user import User


@dataclass(frozen=True)
class Viewer:
    """
    요청 단위로 만들어지는 현재 사용자 정보. 저장되지 않으며 생성 후 변경되지 않습니다.
    user_id가 None이면 익명 사용자입니다.
    """
    user_id: Optional[str] = None
    username: Optional[str] = None
    profile_picture_url: Optional[str] = None
    bookmarked_posts: FrozenSet[str] = frozenset()

    @classmethod
    def anonymous(cls) -> "Viewer":
        return cls()

    @classmethod
    def from_user(cls, user: User) -> "Viewer":
        return cls(
            user_id=user.user_id,
            username=user.username,
            profile_picture_url=user.profile_picture_url,
            bookmarked_posts=frozenset(user.bookmarked_posts),
        )

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    def user_vote(self, post: Post) -> Optional[str]:
        """'upvote' / 'downvote' / None. 익명 사용자는 항상 None."""
        direction = post.vote_of(self.user_id)
        return direction.value if direction else None

    def has_bookmarked(self, post_id: str) -> bool:
        """익명 사용자는 항상 False."""
        return self.is_authenticated and post_id in self.bookmarked_posts
