# forum/models/comment.py
from dataclasses import dataclass, field, fields, asdict
from datetime import datetime
from typing import Optional, List, Dict, Any

from forum.utils.datetime_utils import DateTimeUtils


@dataclass
class Comment:
    """
    Firestore 'comments' 컬렉션의 문서 구조를 정의하는 데이터클래스.
    parent_id가 None이면 게시글의 최상위 댓글이고, 아니면 parent_id 댓글의 replies에 연결됩니다.
    """
    comment_id: str
    post_id: str
    user_id: str
    content: str
    parent_id: Optional[str] = None
    replies: List[str] = field(default_factory=list)
    is_edited: bool = False
    created_at: datetime = field(default_factory=DateTimeUtils.now)
    updated_at: datetime = field(default_factory=DateTimeUtils.now)

    @property
    def is_top_level(self) -> bool:
        return self.parent_id is None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Comment":
        known = {f.name for f in fields(cls)}
        processed_data = {k: v for k, v in data.items() if k in known}
        if processed_data.get('replies') is None:
            processed_data['replies'] = []
        return cls(**processed_data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
