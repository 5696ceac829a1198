# forum/api/posts/services.py
import logging
import uuid
from typing import Optional, List

from forum.core.errors import NotFoundError, ForbiddenError, InputValidationError
from forum.models.post import Post
from forum.services.document_store import POSTS, USERS
from forum.services.sanitizer import sanitize_post, extract_first_image
from forum.utils.datetime_utils import DateTimeUtils


def normalize_tags(tags: Optional[List[str]]) -> List[str]:
    """공백 태그를 버리고 순서를 유지한 채 중복을 제거합니다."""
    return list(dict.fromkeys(t.strip() for t in (tags or []) if t and t.strip()))


def clean_title(title: Optional[str]) -> str:
    title = (title or '').strip()
    if not title:
        raise InputValidationError("제목을 입력해주세요.")
    return title


class PostService:
    """
    게시글 작성/수정/삭제를 담당하는 서비스 클래스.
    투표, 북마크, 댓글 연결은 각 도메인 서비스가 직접 처리합니다.
    """
    def __init__(self, store):
        self.store = store

    def find_post(self, post_id: str) -> Optional[Post]:
        data = self.store.find_by_id(POSTS, post_id)
        return Post.from_dict(data) if data else None

    def get_post(self, post_id: str) -> Post:
        post = self.find_post(post_id)
        if not post:
            raise NotFoundError("게시글을 찾을 수 없습니다.")
        return post

    def _get_owned_post(self, post_id: str, user_id: str) -> Post:
        post = self.get_post(post_id)
        if post.user_id != user_id:
            raise ForbiddenError("게시글에 대한 권한이 없습니다.")
        return post

    def create_post(self, user_id: str, title: str, content: str, tags: Optional[List[str]] = None) -> Post:
        """
        새 게시글을 저장한 뒤 작성자의 posts 목록과 post_count를 한 번의 쓰기로 갱신합니다.
        두 쓰기 사이에 실패하면 게시글은 남고 작성자 목록에는 빠질 수 있습니다.
        """
        sanitized = sanitize_post(content)
        if not sanitized.strip():
            raise InputValidationError("게시글 내용이 비어 있습니다.")

        new_post = Post(
            post_id=str(uuid.uuid4()),
            user_id=user_id,
            title=clean_title(title),
            content=sanitized,
            tags=normalize_tags(tags),
            image=extract_first_image(content)
        )
        self.store.save(POSTS, new_post.post_id, new_post.to_dict())
        self.store.modify(USERS, user_id,
                          add_to_set={'posts': [new_post.post_id]},
                          increment={'post_count': 1})
        logging.info(f"게시글 생성 완료 (post_id: {new_post.post_id}, user_id: {user_id})")
        return new_post

    def update_post(self, post_id: str, user_id: str, title: Optional[str] = None,
                    content: Optional[str] = None, tags: Optional[List[str]] = None) -> Post:
        """작성자 본인만 수정할 수 있습니다. 내용은 다시 정리(sanitize)되어 저장됩니다."""
        self._get_owned_post(post_id, user_id)

        set_fields = {'updated_at': DateTimeUtils.now()}
        if title is not None:
            set_fields['title'] = clean_title(title)
        if content is not None:
            sanitized = sanitize_post(content)
            if not sanitized.strip():
                raise InputValidationError("게시글 내용이 비어 있습니다.")
            set_fields['content'] = sanitized
            set_fields['image'] = extract_first_image(content)
        if tags is not None:
            set_fields['tags'] = normalize_tags(tags)

        self.store.modify(POSTS, post_id, set_fields=set_fields)
        return self.get_post(post_id)

    def delete_post(self, post_id: str, user_id: str) -> None:
        """
        게시글 문서를 삭제하고 작성자의 posts 목록에서 제거합니다.
        댓글과 다른 사용자의 북마크는 함께 삭제되지 않습니다.
        """
        self._get_owned_post(post_id, user_id)
        self.store.delete_by_id(POSTS, post_id)
        try:
            self.store.modify(USERS, user_id,
                              pull={'posts': [post_id]},
                              increment={'post_count': -1})
        except NotFoundError:
            logging.warning(f"게시글 작성자 문서가 없어 목록 정리를 건너뜁니다 (user_id: {user_id})")
        logging.info(f"게시글 삭제 완료 (post_id: {post_id}, user_id: {user_id})")
