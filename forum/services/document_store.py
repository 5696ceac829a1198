# forum/services/document_store.py
"""
Firestore 기반 문서 저장소 어댑터.

서비스 계층은 이 클래스가 제공하는 연산만 사용합니다.
- 단일 문서 단위의 원자성만 가정하며, 여러 문서에 걸친 트랜잭션은 사용하지 않습니다.
- 배열 필드 변경은 항상 ArrayUnion/ArrayRemove, 카운터는 Increment로 처리하여
  문서 전체를 읽고-수정하고-덮어쓰는 경쟁 상태를 피합니다.
"""
import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from firebase_admin import firestore
from google.api_core import exceptions as google_exceptions
from google.cloud.firestore_v1.base_query import FieldFilter

from forum.core.errors import NotFoundError, StoreError
from forum.utils.datetime_utils import DateTimeUtils

USERS = 'users'
POSTS = 'posts'
COMMENTS = 'comments'
REVOKED_TOKENS = 'revoked_tokens'

ASCENDING = 'ASCENDING'
DESCENDING = 'DESCENDING'

Filter = Tuple[str, str, Any]
Order = Tuple[str, str]


class FirestoreDocumentStore:
    def __init__(self, db=None):
        self.db = db or firestore.client()

    @contextmanager
    def _translate_errors(self, action: str, collection: str, doc_id: Optional[str] = None):
        try:
            yield
        except google_exceptions.NotFound as e:
            raise NotFoundError(f"문서를 찾을 수 없습니다: {collection}/{doc_id}") from e
        except google_exceptions.GoogleAPIError as e:
            logging.error(f"Firestore {action} 실패 ({collection}/{doc_id}): {e}", exc_info=True)
            raise StoreError() from e

    def _document(self, collection: str, doc_id: str):
        return self.db.collection(collection).document(doc_id)

    def find_by_id(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        with self._translate_errors('조회', collection, doc_id):
            snapshot = self._document(collection, doc_id).get()
        if not snapshot.exists:
            return None
        return DateTimeUtils.from_firestore(snapshot.to_dict())

    def find_by_ids(self, collection: str, doc_ids: Iterable[str]) -> List[Dict[str, Any]]:
        """여러 문서를 한 번에 조회합니다. 없는 ID는 건너뛰고 입력 순서를 유지합니다."""
        doc_ids = list(dict.fromkeys(doc_ids))
        if not doc_ids:
            return []
        refs = [self._document(collection, doc_id) for doc_id in doc_ids]
        with self._translate_errors('일괄 조회', collection):
            snapshots = {snapshot.id: snapshot for snapshot in self.db.get_all(refs)}
        return [
            DateTimeUtils.from_firestore(snapshots[doc_id].to_dict())
            for doc_id in doc_ids
            if doc_id in snapshots and snapshots[doc_id].exists
        ]

    def find(self, collection: str, filters: Optional[Sequence[Filter]] = None,
             order_by: Optional[Sequence[Order]] = None, offset: int = 0,
             limit: Optional[int] = None) -> List[Dict[str, Any]]:
        query = self.db.collection(collection)
        for field_path, op, value in filters or []:
            query = query.where(filter=FieldFilter(field_path, op, value))
        for field_path, direction in order_by or []:
            query_direction = firestore.Query.DESCENDING if direction == DESCENDING else firestore.Query.ASCENDING
            query = query.order_by(field_path, direction=query_direction)
        if offset:
            query = query.offset(offset)
        if limit:
            query = query.limit(limit)
        with self._translate_errors('목록 조회', collection):
            return [DateTimeUtils.from_firestore(doc.to_dict()) for doc in query.stream()]

    def save(self, collection: str, doc_id: str, data: Dict[str, Any]) -> None:
        """문서 전체를 저장합니다 (upsert)."""
        with self._translate_errors('저장', collection, doc_id):
            self._document(collection, doc_id).set(DateTimeUtils.for_firestore(data))

    def modify(self, collection: str, doc_id: str, set_fields: Optional[Dict[str, Any]] = None,
               add_to_set: Optional[Dict[str, Iterable[Any]]] = None,
               pull: Optional[Dict[str, Iterable[Any]]] = None,
               increment: Optional[Dict[str, int]] = None) -> None:
        """
        필드 설정, 배열 추가/제거, 카운터 증감을 하나의 원자적 단일 문서 쓰기로 적용합니다.
        문서가 없으면 NotFoundError를 발생시킵니다.
        """
        changes: Dict[str, Any] = dict(DateTimeUtils.for_firestore(set_fields or {}))
        for field_path, values in (add_to_set or {}).items():
            changes[field_path] = firestore.ArrayUnion(list(values))
        for field_path, values in (pull or {}).items():
            changes[field_path] = firestore.ArrayRemove(list(values))
        for field_path, amount in (increment or {}).items():
            changes[field_path] = firestore.Increment(amount)
        if not changes:
            return
        with self._translate_errors('수정', collection, doc_id):
            self._document(collection, doc_id).update(changes)

    def add_to_set(self, collection: str, doc_id: str, field_path: str, *values: Any) -> None:
        self.modify(collection, doc_id, add_to_set={field_path: values})

    def pull(self, collection: str, doc_id: str, field_path: str, *values: Any) -> None:
        self.modify(collection, doc_id, pull={field_path: values})

    def increment(self, collection: str, doc_id: str, field_path: str, amount: int = 1) -> None:
        self.modify(collection, doc_id, increment={field_path: amount})

    def delete_by_id(self, collection: str, doc_id: str) -> None:
        with self._translate_errors('삭제', collection, doc_id):
            self._document(collection, doc_id).delete()
