# forum/models/user.py
from dataclasses import dataclass, field, fields, asdict
from datetime import datetime
from typing import Optional, List, Dict, Any

from forum.utils.datetime_utils import DateTimeUtils

DEFAULT_PROFILE_PICTURE = '/images/default-avatar.jpg'


@dataclass
class User:
    """
    Firestore 'users' 컬렉션의 문서 구조를 정의하는 데이터클래스.
    posts/comments/bookmarked_posts는 다른 컬렉션 문서 ID의 목록입니다.
    """
    user_id: str
    username: str
    email: str
    password_hash: str
    profile_picture: Optional[str] = DEFAULT_PROFILE_PICTURE
    country: str = ''
    about_me: str = ''
    saved_tags: List[str] = field(default_factory=list)
    posts: List[str] = field(default_factory=list)
    comments: List[str] = field(default_factory=list)
    friends: List[str] = field(default_factory=list)
    bookmarked_posts: List[str] = field(default_factory=list)
    # 증감 연산으로만 관리되는 카운터 (posts 길이와 어긋날 수 있음)
    post_count: int = 0
    comment_count: int = 0
    created_at: datetime = field(default_factory=DateTimeUtils.now)
    updated_at: datetime = field(default_factory=DateTimeUtils.now)

    @property
    def number_of_posts(self) -> int:
        """저장된 카운터가 아닌 posts 목록으로부터 계산한 게시글 수."""
        return len(self.posts)

    @property
    def profile_picture_url(self) -> str:
        return self.profile_picture or DEFAULT_PROFILE_PICTURE

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "User":
        """Firestore 문서 딕셔너리로부터 User 인스턴스를 생성합니다. 알 수 없는 필드는 무시합니다."""
        known = {f.name for f in fields(cls)}
        processed_data = {k: v for k, v in data.items() if k in known}
        for list_field in ('saved_tags', 'posts', 'comments', 'friends', 'bookmarked_posts'):
            if processed_data.get(list_field) is None:
                processed_data[list_field] = []
        return cls(**processed_data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
