# forum/utils/test_datetime_utils.py
"""
시간 유틸리티 테스트

사용법: python -m pytest forum/utils/test_datetime_utils.py -v
"""

from datetime import datetime, date, timedelta, timezone

from forum.utils.datetime_utils import DateTimeUtils


def test_now_is_timezone_aware():
    assert DateTimeUtils.now().tzinfo == timezone.utc


def test_for_firestore():
    """Firestore 변환 테스트"""
    test_data = {
        'created_at': datetime(2024, 1, 15, 10, 30),
        'birthday': date(2020, 1, 15),
        'nested': {
            'updated_at': datetime(2024, 1, 15, 19, 30, tzinfo=timezone(timedelta(hours=9)))
        },
        'list_data': [
            {'revoked_at': datetime(2024, 1, 1)}
        ],
        'title': 'unchanged'
    }

    converted = DateTimeUtils.for_firestore(test_data)

    # date는 datetime으로 변환되어야 함
    assert converted['birthday'] == datetime(2020, 1, 15, tzinfo=timezone.utc)
    # 모든 datetime은 UTC로 정규화되어야 함
    assert converted['created_at'].tzinfo == timezone.utc
    assert converted['nested']['updated_at'] == datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)
    assert converted['nested']['updated_at'].tzinfo == timezone.utc
    assert converted['list_data'][0]['revoked_at'].tzinfo == timezone.utc
    assert converted['title'] == 'unchanged'


def test_from_firestore():
    """Firestore 읽기 변환 테스트"""
    kst = timezone(timedelta(hours=9))
    data = {
        'created_at': datetime(2024, 1, 15, 19, 30, tzinfo=kst),
        'naive': datetime(2024, 1, 15, 10, 30),
        'items': [datetime(2024, 1, 1, tzinfo=timezone.utc)],
        'count': 3
    }

    converted = DateTimeUtils.from_firestore(data)

    assert converted['created_at'] == datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)
    assert converted['created_at'].tzinfo == timezone.utc
    assert converted['naive'].tzinfo == timezone.utc
    assert converted['items'][0].tzinfo == timezone.utc
    assert converted['count'] == 3


def test_package_exposes_only_the_utility_class():
    """시간 변환은 DateTimeUtils 하나로만 접근합니다."""
    import forum.utils
    from forum.utils import datetime_utils

    assert forum.utils.__all__ == ['DateTimeUtils']
    assert not hasattr(datetime_utils, 'now')
    assert not hasattr(datetime_utils, 'for_firestore')
    assert not hasattr(datetime_utils, 'from_firestore')
