# forum/api/users/services.py
import logging
from typing import Optional, Dict, Any, Iterable

from forum.core.errors import NotFoundError, InputValidationError
from forum.core.security import hash_password, verify_password
from forum.models.post import Post
from forum.models.user import User
from forum.services.document_store import USERS, POSTS, DESCENDING
from forum.utils.datetime_utils import DateTimeUtils


class UserService:
    """
    사용자 조회, 공개 프로필, 프로필 수정을 담당하는 서비스 클래스.
    다른 도메인 서비스는 작성자 정보를 채울 때 이 서비스를 사용합니다.
    """
    def __init__(self, store):
        self.store = store

    def find_user(self, user_id: str) -> Optional[User]:
        data = self.store.find_by_id(USERS, user_id)
        return User.from_dict(data) if data else None

    def get_user(self, user_id: str) -> User:
        user = self.find_user(user_id)
        if not user:
            raise NotFoundError("사용자를 찾을 수 없습니다.")
        return user

    def find_by_username(self, username: str) -> Optional[User]:
        docs = self.store.find(USERS, filters=[('username', '==', username)], limit=1)
        return User.from_dict(docs[0]) if docs else None

    def find_by_email(self, email: str) -> Optional[User]:
        docs = self.store.find(USERS, filters=[('email', '==', email)], limit=1)
        return User.from_dict(docs[0]) if docs else None

    def author_summaries(self, user_ids: Iterable[str]) -> Dict[str, Dict[str, Any]]:
        """user_id -> {user_id, username, profile_picture_url} 매핑을 한 번의 일괄 조회로 만듭니다."""
        users = [User.from_dict(d) for d in self.store.find_by_ids(USERS, user_ids)]
        return {user.user_id: self.summarize(user) for user in users}

    @staticmethod
    def summarize(user: User) -> Dict[str, Any]:
        return {
            "user_id": user.user_id,
            "username": user.username,
            "profile_picture_url": user.profile_picture_url,
        }

    def get_profile(self, username: str) -> Dict[str, Any]:
        """공개 프로필과 사용자가 작성한 게시글 목록(최신순)을 조회합니다."""
        user = self.find_by_username(username)
        if not user:
            raise NotFoundError("사용자를 찾을 수 없습니다.")

        post_docs = self.store.find(POSTS, filters=[('user_id', '==', user.user_id)],
                                    order_by=[('created_at', DESCENDING)])
        posts = [Post.from_dict(d) for d in post_docs]
        friends = [User.from_dict(d).username for d in self.store.find_by_ids(USERS, user.friends)]

        return {
            "user_id": user.user_id,
            "username": user.username,
            "profile_picture_url": user.profile_picture_url,
            "country": user.country,
            "about_me": user.about_me,
            "saved_tags": user.saved_tags,
            "number_of_posts": user.number_of_posts,
            "post_count": user.post_count,
            "comment_count": user.comment_count,
            "friends": friends,
            "posts": [
                {
                    "post_id": post.post_id,
                    "title": post.title,
                    "tags": post.tags,
                    "upvote_count": post.upvote_count,
                    "comment_count": post.comment_count,
                    "created_at": post.created_at,
                }
                for post in posts
            ],
            "created_at": user.created_at,
        }

    def update_profile(self, user_id: str, changes: Dict[str, Any]) -> User:
        """
        프로필 필드를 수정합니다.
        - username/email 변경 시 중복 여부를 다시 확인합니다.
        - 비밀번호 변경은 현재 비밀번호가 맞아야 합니다.
        """
        user = self.get_user(user_id)
        set_fields: Dict[str, Any] = {}

        username = changes.get('username')
        if username and username != user.username:
            if self.find_by_username(username):
                raise InputValidationError("이미 사용 중인 사용자 이름입니다.")
            set_fields['username'] = username

        email = changes.get('email')
        if email and email.lower() != user.email:
            if self.find_by_email(email.lower()):
                raise InputValidationError("이미 사용 중인 이메일입니다.")
            set_fields['email'] = email.lower()

        for key in ('country', 'about_me'):
            if changes.get(key):
                set_fields[key] = changes[key]

        if changes.get('saved_tags') is not None:
            set_fields['saved_tags'] = list(dict.fromkeys(t.strip() for t in changes['saved_tags'] if t.strip()))

        if changes.get('new_password'):
            if not verify_password(user.password_hash, changes.get('current_password')):
                raise InputValidationError("현재 비밀번호가 올바르지 않습니다.")
            set_fields['password_hash'] = hash_password(changes['new_password'])

        if not set_fields:
            return user

        set_fields['updated_at'] = DateTimeUtils.now()
        self.store.modify(USERS, user_id, set_fields=set_fields)
        logging.info(f"프로필 수정 완료 (user_id: {user_id}, fields: {sorted(set_fields)})")
        return self.get_user(user_id)
