# forum/__init__.py

# =====================================================================================
# 1. 환경 변수 로드 (가장 먼저 실행)
# =====================================================================================
from dotenv import load_dotenv
load_dotenv()

# =====================================================================================
# 2. 모듈 임포트 (Module Imports)
# =====================================================================================
import os
import logging
from flask import Flask, jsonify
from marshmallow import ValidationError
from flask_jwt_extended import JWTManager
from werkzeug.exceptions import HTTPException
import firebase_admin
from firebase_admin import credentials

# - 설정 및 공통 모듈
from forum.core.config import config_by_name
from forum.core.errors import ForumError
from forum.core.identity import init_identity
from forum.services.document_store import FirestoreDocumentStore

# - API 블루프린트
from forum.api.auth.routes import auth_bp
from forum.api.users.routes import users_bp
from forum.api.posts.routes import posts_bp
from forum.api.votes.routes import votes_bp
from forum.api.bookmarks.routes import bookmarks_bp
from forum.api.comments.routes import comments_bp
from forum.api.feed.routes import feed_bp

# - 서비스 클래스
from forum.api.auth.services import AuthService
from forum.api.users.services import UserService
from forum.api.posts.services import PostService
from forum.api.votes.services import VoteService
from forum.api.bookmarks.services import BookmarkService
from forum.api.comments.services import CommentService
from forum.api.feed.services import FeedService


def _init_firestore_store(app: Flask) -> FirestoreDocumentStore:
    if not firebase_admin._apps:
        cred_path = app.config['FIREBASE_CREDENTIALS_PATH']
        if not cred_path or not os.path.exists(cred_path):
            raise FileNotFoundError(f"Firebase 인증 파일을 찾을 수 없습니다: {cred_path}")
        firebase_admin.initialize_app(credentials.Certificate(cred_path))
    return FirestoreDocumentStore()


def create_app(config_name=None, store=None):
    """
    Flask 애플리케이션 팩토리 함수.
    store가 주어지면 Firestore 대신 해당 문서 저장소를 사용합니다. (테스트용)
    """
    # =====================================================================================
    # 3. Flask 앱 생성 및 기본 설정
    # =====================================================================================
    config_name = config_name or os.getenv('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    app.json.ensure_ascii = False

    if not app.config.get('JWT_SECRET_KEY'):
        raise ValueError("필수 환경 변수가 설정되지 않았습니다: JWT_SECRET_KEY")

    # =====================================================================================
    # 4. 확장 기능 및 외부 서비스 초기화
    # =====================================================================================
    jwt = JWTManager(app)

    if store is None:
        store = _init_firestore_store(app)
        logging.info("Firestore document store initialized successfully")

    # =====================================================================================
    # 5. 서비스 인스턴스 생성 및 'app.services'에 저장 (의존성 주입)
    # =====================================================================================
    app.services = {}

    # 5-1. 다른 서비스의 기반이 되는 사용자 서비스 먼저 생성
    app.services['users'] = UserService(store)

    # 5-2. 다른 서비스를 주입받아야 하는 도메인 서비스 생성
    app.services['auth'] = AuthService(store, user_service=app.services['users'])
    app.services['posts'] = PostService(store)
    app.services['votes'] = VoteService(store)
    app.services['bookmarks'] = BookmarkService(store)
    app.services['comments'] = CommentService(store, user_service=app.services['users'])
    app.services['feed'] = FeedService(
        store,
        user_service=app.services['users'],
        comment_service=app.services['comments'],
        page_size=app.config['PAGE_SIZE'],
        search_limit=app.config['SEARCH_LIMIT'],
        search_scan_limit=app.config['SEARCH_SCAN_LIMIT']
    )

    # - 로그아웃으로 폐기된 토큰 확인 (Blocklist)
    @jwt.token_in_blocklist_loader
    def check_if_token_revoked(jwt_header, jwt_payload: dict) -> bool:
        return app.services['auth'].is_token_revoked(jwt_payload)

    # - 요청마다 Viewer 생성
    init_identity(app)

    # =====================================================================================
    # 6. 블루프린트 등록
    # =====================================================================================
    app.register_blueprint(auth_bp, url_prefix='/auth')
    app.register_blueprint(users_bp, url_prefix='/profile')
    app.register_blueprint(posts_bp, url_prefix='/post')
    app.register_blueprint(votes_bp)
    app.register_blueprint(bookmarks_bp)
    app.register_blueprint(comments_bp)
    app.register_blueprint(feed_bp)

    # =====================================================================================
    # 7. 전역 에러 핸들러 설정
    # =====================================================================================
    @app.errorhandler(ForumError)
    def handle_forum_error(err):
        if err.status_code >= 500:
            logging.error(f"{err.error_code}: {err.message}", exc_info=True)
        return jsonify(err.to_dict()), err.status_code

    @app.errorhandler(ValidationError)
    def handle_marshmallow_validation(err):
        response = {"error": "VALIDATION_ERROR", "message": "요청 데이터가 올바르지 않습니다.", "details": err.messages}
        return jsonify(response), 400

    @app.errorhandler(HTTPException)
    def handle_http_exception(err):
        response = {"error": err.name.upper().replace(' ', '_'), "message": err.description}
        return jsonify(response), err.code

    @app.errorhandler(Exception)
    def handle_generic_exception(err):
        # 다른 핸들러에서 처리되지 않은 모든 예외를 여기서 처리
        logging.error(f"An unhandled exception occurred: {err}", exc_info=True)
        response = {"error": "INTERNAL_SERVER_ERROR", "message": "서버 내부에서 예상치 못한 오류가 발생했습니다."}
        return jsonify(response), 500

    # =====================================================================================
    # 8. 로깅 및 앱 반환
    # =====================================================================================
    if not app.debug:
        logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]')

    logging.info(f"Flask app created for '{config_name}' environment.")

    return app
