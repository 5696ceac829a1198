# forum/services/sanitizer.py
"""
사용자가 작성한 리치 텍스트(HTML)를 저장 전에 허용 목록 기반으로 정리합니다.
허용되지 않은 태그는 이스케이프하지 않고 제거하며, 내부 텍스트만 남깁니다.
단, script/style 같은 비텍스트 요소는 내용까지 함께 제거합니다.
"""
import re
from typing import Optional
from urllib.parse import urlsplit

import bleach

# 댓글: 인라인 서식만 허용
COMMENT_ALLOWED_TAGS = frozenset({'p', 'br', 'strong', 'em', 'u'})
# 게시글: 댓글 허용 목록 + 제목/목록
POST_ALLOWED_TAGS = COMMENT_ALLOWED_TAGS | frozenset({'h1', 'h2', 'h3', 'h4', 'h5', 'h6', 'ul', 'ol', 'li'})

# 태그와 함께 내용까지 버리는 요소 (닫는 태그가 없으면 문서 끝까지)
NON_TEXT_TAGS = ('script', 'style', 'textarea', 'noscript', 'iframe', 'xmp', 'title')
_NON_TEXT_PATTERN = re.compile(
    r'<(%s)\b[^>]*>.*?(?:</\1\s*>|$)' % '|'.join(NON_TEXT_TAGS),
    re.IGNORECASE | re.DOTALL
)
_WHITESPACE_PATTERN = re.compile(r'\s+')

_IMAGE_SRC_PATTERN = re.compile(r'<img[^>]+src="?([^"\s>]+)"?', re.IGNORECASE)
_IMAGE_SCHEMES = ('', 'http', 'https')


def _clean(html: str, allowed_tags) -> str:
    """
    공백을 한 칸으로 접은 뒤 정리합니다.
    bleach는 블록 태그를 제거할 때 줄바꿈을 넣으므로, 입력에 남은 줄바꿈이 없는 상태에서
    결과의 줄바꿈을 모두 지워 버전과 상관없이 같은 결과를 냅니다.
    """
    html = _NON_TEXT_PATTERN.sub('', html or '')
    html = _WHITESPACE_PATTERN.sub(' ', html)
    cleaned = bleach.clean(
        html,
        tags=allowed_tags,
        attributes={},
        strip=True,
        strip_comments=True,
    )
    return cleaned.replace('\n', '')


def sanitize_comment(html: str) -> str:
    return _clean(html, COMMENT_ALLOWED_TAGS)


def sanitize_post(html: str) -> str:
    return _clean(html, POST_ALLOWED_TAGS)


def extract_first_image(html: str) -> Optional[str]:
    """
    정리 전 원본 HTML에서 게시글 대표 이미지로 쓸 첫 번째 <img>의 src를 찾습니다.
    http(s) 또는 상대 경로만 인정하고, javascript: 같은 다른 스킴은 건너뜁니다.
    """
    for src in _IMAGE_SRC_PATTERN.findall(html or ''):
        if urlsplit(src).scheme.lower() in _IMAGE_SCHEMES:
            return src
    return None
