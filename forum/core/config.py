# forum/core/config.py

import os
from datetime import timedelta


class Config:
    """모든 환경 설정의 기반이 되는 공통 설정 클래스입니다."""
    SECRET_KEY = os.getenv('SECRET_KEY', 'forum-dev-secret-key')
    # JWT 토큰 서명에 사용되는 키. 헤더(Bearer)와 'token' 쿠키 양쪽에서 토큰을 읽습니다.
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY')
    JWT_TOKEN_LOCATION = ['headers', 'cookies']
    JWT_ACCESS_COOKIE_NAME = 'token'
    JWT_COOKIE_SAMESITE = 'Strict'
    JWT_COOKIE_SECURE = False
    # SameSite=Strict 쿠키로 CSRF를 막으므로 double submit 토큰은 사용하지 않습니다.
    JWT_COOKIE_CSRF_PROTECT = False
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(days=1)
    REMEMBER_ME_EXPIRES = timedelta(days=30)

    FIREBASE_CREDENTIALS_PATH = os.getenv('FIREBASE_CREDENTIALS_PATH')

    # 익명 홈 피드와 모든 /api 목록의 페이지 크기
    PAGE_SIZE = 15
    SEARCH_LIMIT = 20
    # 자유 텍스트 검색 시 스캔하는 최신 게시글 수 (Firestore는 부분 문자열 검색을 지원하지 않음)
    SEARCH_SCAN_LIMIT = 500


class DevelopmentConfig(Config):
    """개발 환경을 위한 설정 클래스입니다."""
    DEBUG = True
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY', 'forum-dev-jwt-secret-key-change-me')
    FIREBASE_CREDENTIALS_PATH = os.getenv('DEV_FIREBASE_CREDENTIALS_PATH', Config.FIREBASE_CREDENTIALS_PATH)


class TestingConfig(Config):
    """테스트 환경을 위한 설정 클래스입니다."""
    TESTING = True
    DEBUG = False
    JWT_SECRET_KEY = 'forum-testing-jwt-secret-key-0123456789'
    FIREBASE_CREDENTIALS_PATH = os.getenv('TEST_FIREBASE_CREDENTIALS_PATH')


class ProductionConfig(Config):
    """운영 환경을 위한 설정 클래스입니다."""
    DEBUG = False
    JWT_COOKIE_SECURE = True
    FIREBASE_CREDENTIALS_PATH = os.getenv('PROD_FIREBASE_CREDENTIALS_PATH', Config.FIREBASE_CREDENTIALS_PATH)


# FLASK_ENV 값에 따라 create_app에서 적절한 설정 클래스를 선택합니다.
config_by_name = dict(
    development=DevelopmentConfig,
    testing=TestingConfig,
    production=ProductionConfig
)
