# forum/api/comments/services.py

import logging
import uuid
from typing import Optional, Dict, Any, List, Set

from forum.api.users.services import UserService
from forum.core.errors import NotFoundError, ForbiddenError, InputValidationError
from forum.models.comment import Comment
from forum.models.post import Post
from forum.services.document_store import COMMENTS, POSTS, USERS
from forum.services.sanitizer import sanitize_comment
from forum.utils.datetime_utils import DateTimeUtils


class CommentService:
    """
    댓글/답글의 작성, 수정, 삭제와 부모-자식 연결을 담당하는 서비스 클래스.
    - 최상위 댓글은 게시글의 comments에, 답글은 부모 댓글의 replies에 연결됩니다.
    - 각 단계는 독립된 단일 문서 쓰기이며 여러 문서를 묶는 트랜잭션은 사용하지 않습니다.
    """
    def __init__(self, store, user_service: UserService):
        self.store = store
        self.user_service = user_service

    def _get_comment(self, comment_id: str) -> Comment:
        data = self.store.find_by_id(COMMENTS, comment_id)
        if not data:
            raise NotFoundError("댓글을 찾을 수 없습니다.")
        return Comment.from_dict(data)

    def _to_view(self, comment: Comment, authors: Dict[str, Dict[str, Any]]) -> Dict[str, Any]:
        view = comment.to_dict()
        view['author'] = authors.get(comment.user_id)
        return view

    def _with_author(self, comment: Comment) -> Dict[str, Any]:
        return self._to_view(comment, self.user_service.author_summaries([comment.user_id]))

    def get_comment(self, comment_id: str) -> Dict[str, Any]:
        """ID로 댓글 하나를 조회합니다. 부모가 삭제된 답글도 조회됩니다."""
        return self._with_author(self._get_comment(comment_id))

    def create_comment(self, post_id: str, author_id: str, content: str,
                       parent_comment_id: Optional[str] = None) -> Dict[str, Any]:
        """새 댓글을 저장한 뒤 부모(댓글 또는 게시글)와 작성자 문서에 연결합니다."""
        sanitized = sanitize_comment(content)
        if not sanitized.strip():
            raise InputValidationError("댓글 내용이 비어 있습니다.")

        if not self.store.find_by_id(POSTS, post_id):
            raise NotFoundError("댓글을 작성할 게시글이 존재하지 않습니다.")

        if parent_comment_id:
            parent = self._get_comment(parent_comment_id)
            if parent.post_id != post_id:
                raise InputValidationError("부모 댓글이 다른 게시글에 속해 있습니다.")

        self.user_service.get_user(author_id)

        new_comment = Comment(
            comment_id=str(uuid.uuid4()),
            post_id=post_id,
            user_id=author_id,
            content=sanitized,
            parent_id=parent_comment_id or None
        )
        self.store.save(COMMENTS, new_comment.comment_id, new_comment.to_dict())

        if new_comment.parent_id:
            self.store.add_to_set(COMMENTS, new_comment.parent_id, 'replies', new_comment.comment_id)
        else:
            self.store.add_to_set(POSTS, post_id, 'comments', new_comment.comment_id)

        self.store.modify(USERS, author_id,
                          add_to_set={'comments': [new_comment.comment_id]},
                          increment={'comment_count': 1})

        logging.info(f"댓글 생성 완료 (comment_id: {new_comment.comment_id}, post_id: {post_id}, "
                     f"parent_id: {new_comment.parent_id})")
        return self._with_author(new_comment)

    def edit_comment(self, comment_id: str, requester_id: str, new_content: str) -> Dict[str, Any]:
        """작성자 본인만 수정할 수 있으며 수정 후 is_edited가 True가 됩니다."""
        comment = self._get_comment(comment_id)
        if comment.user_id != requester_id:
            raise ForbiddenError("댓글을 수정할 권한이 없습니다.")

        sanitized = sanitize_comment(new_content)
        if not sanitized.strip():
            raise InputValidationError("댓글 내용이 비어 있습니다.")

        self.store.modify(COMMENTS, comment_id, set_fields={
            'content': sanitized,
            'is_edited': True,
            'updated_at': DateTimeUtils.now(),
        })
        logging.info(f"댓글 수정 완료 (comment_id: {comment_id})")
        return self.get_comment(comment_id)

    def delete_comment(self, comment_id: str, requester_id: str) -> None:
        """
        댓글을 정확히 한 곳(부모 댓글의 replies 또는 게시글의 comments)에서 분리한 뒤 삭제합니다.
        이 댓글의 답글들은 삭제되거나 다시 연결되지 않고 ID로만 접근 가능한 상태로 남습니다.
        """
        comment = self._get_comment(comment_id)
        if comment.user_id != requester_id:
            raise ForbiddenError("댓글을 삭제할 권한이 없습니다.")

        if comment.parent_id:
            parent_collection, parent_id, field_name = COMMENTS, comment.parent_id, 'replies'
        else:
            parent_collection, parent_id, field_name = POSTS, comment.post_id, 'comments'
        try:
            self.store.pull(parent_collection, parent_id, field_name, comment_id)
        except NotFoundError:
            logging.warning(f"부모 문서가 이미 삭제되어 연결 해제를 건너뜁니다 ({parent_collection}/{parent_id})")

        try:
            self.store.modify(USERS, comment.user_id,
                              pull={'comments': [comment_id]},
                              increment={'comment_count': -1})
        except NotFoundError:
            logging.warning(f"댓글 작성자 문서가 없어 목록 정리를 건너뜁니다 (user_id: {comment.user_id})")

        self.store.delete_by_id(COMMENTS, comment_id)
        if comment.replies:
            logging.info(f"삭제된 댓글의 답글 {len(comment.replies)}개는 그대로 남습니다 (comment_id: {comment_id})")
        logging.info(f"댓글 삭제 완료 (comment_id: {comment_id})")

    def get_comment_tree(self, post: Post) -> List[Dict[str, Any]]:
        """
        게시글의 comments에서 시작해 replies를 따라 내려가며 중첩된 댓글 트리를 만듭니다.
        연결이 끊긴 댓글은 포함되지 않습니다.
        """
        docs = self.store.find(COMMENTS, filters=[('post_id', '==', post.post_id)])
        by_id = {d['comment_id']: Comment.from_dict(d) for d in docs}
        authors = self.user_service.author_summaries({c.user_id for c in by_id.values()})
        visited: Set[str] = set()

        def build(comment_id: str) -> Optional[Dict[str, Any]]:
            comment = by_id.get(comment_id)
            if comment is None or comment_id in visited:
                return None
            visited.add(comment_id)
            node = self._to_view(comment, authors)
            node['replies'] = [child for child in map(build, comment.replies) if child]
            return node

        return [node for node in map(build, post.comments) if node]
