# conftest.py
"""
공용 pytest 픽스처.

Firestore 대신 같은 연산 의미(중복 없는 배열 추가, 모든 일치 항목 제거,
없는 문서 수정 시 NotFoundError)를 지키는 메모리 저장소를 주입합니다.
"""
import copy
from datetime import datetime, timedelta, timezone

import pytest
from flask_jwt_extended import create_access_token

from forum import create_app
from forum.core.errors import NotFoundError
from forum.models.post import Post
from forum.services.document_store import DESCENDING, POSTS


class InMemoryDocumentStore:
    """FirestoreDocumentStore와 같은 인터페이스를 가진 테스트용 메모리 저장소"""

    def __init__(self):
        self.collections = {}

    def _collection(self, name):
        return self.collections.setdefault(name, {})

    def find_by_id(self, collection, doc_id):
        doc = self._collection(collection).get(doc_id)
        return copy.deepcopy(doc) if doc is not None else None

    def find_by_ids(self, collection, doc_ids):
        docs = self._collection(collection)
        return [copy.deepcopy(docs[doc_id]) for doc_id in dict.fromkeys(doc_ids) if doc_id in docs]

    def find(self, collection, filters=None, order_by=None, offset=0, limit=None):
        docs = list(self._collection(collection).values())
        for field_path, op, value in filters or []:
            if op == '==':
                docs = [d for d in docs if d.get(field_path) == value]
            elif op == 'array_contains':
                docs = [d for d in docs if value in (d.get(field_path) or [])]
            else:
                raise ValueError(f"지원하지 않는 연산자: {op}")
        for field_path, direction in reversed(order_by or []):
            docs.sort(key=lambda d: d.get(field_path), reverse=direction == DESCENDING)
        docs = docs[offset:]
        if limit:
            docs = docs[:limit]
        return copy.deepcopy(docs)

    def save(self, collection, doc_id, data):
        self._collection(collection)[doc_id] = copy.deepcopy(data)

    def modify(self, collection, doc_id, set_fields=None, add_to_set=None, pull=None, increment=None):
        doc = self._collection(collection).get(doc_id)
        if doc is None:
            raise NotFoundError(f"문서를 찾을 수 없습니다: {collection}/{doc_id}")
        doc.update(copy.deepcopy(set_fields or {}))
        for field_path, values in (add_to_set or {}).items():
            current = doc.setdefault(field_path, [])
            for value in values:
                if value not in current:
                    current.append(value)
        for field_path, values in (pull or {}).items():
            doc[field_path] = [v for v in doc.get(field_path, []) if v not in list(values)]
        for field_path, amount in (increment or {}).items():
            doc[field_path] = doc.get(field_path, 0) + amount

    def add_to_set(self, collection, doc_id, field_path, *values):
        self.modify(collection, doc_id, add_to_set={field_path: values})

    def pull(self, collection, doc_id, field_path, *values):
        self.modify(collection, doc_id, pull={field_path: values})

    def increment(self, collection, doc_id, field_path, amount=1):
        self.modify(collection, doc_id, increment={field_path: amount})

    def delete_by_id(self, collection, doc_id):
        self._collection(collection).pop(doc_id, None)


@pytest.fixture
def store():
    return InMemoryDocumentStore()


@pytest.fixture
def app(store):
    return create_app('testing', store=store)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def services(app):
    return app.services


@pytest.fixture
def make_user(services):
    """username으로 사용자를 가입시키고 User를 반환합니다. 비밀번호는 'password123'."""
    def _make_user(username):
        return services['auth'].register(username, f"{username}@example.com", 'password123')
    return _make_user


@pytest.fixture
def alice(make_user):
    return make_user('alice')


@pytest.fixture
def bob(make_user):
    return make_user('bob')


@pytest.fixture
def auth_headers(app):
    def _auth_headers(user):
        with app.app_context():
            token = create_access_token(identity=user.user_id)
        return {'Authorization': f'Bearer {token}'}
    return _auth_headers


@pytest.fixture
def seed_post(store):
    """
    작성 시각과 투표자를 직접 지정해 게시글을 저장합니다.
    minutes_ago가 클수록 오래된 게시글입니다.
    """
    base = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def _seed_post(post_id, user_id, title='제목', content='<p>내용</p>', tags=None,
                   upvotes=None, downvotes=None, minutes_ago=0):
        created_at = base - timedelta(minutes=minutes_ago)
        post = Post(post_id=post_id, user_id=user_id, title=title, content=content, tags=tags or [],
                    upvotes=upvotes or [], downvotes=downvotes or [],
                    created_at=created_at, updated_at=created_at)
        store.save(POSTS, post_id, post.to_dict())
        return post
    return _seed_post
