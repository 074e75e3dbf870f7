from flask import Flask, Blueprint, current_app, request, jsonify, make_response
from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from werkzeug.exceptions import HTTPException
from models import Base
from config import get_config
from auth import AccountService
from crypto import PasswordManager
from errors import AccountError, InternalError
from session import SessionManager, get_session_manager, login_required
from utils import get_json_body
import logging

logger = logging.getLogger(__name__)

accounts_bp = Blueprint('accounts', __name__)


# --- SETUP ---
def create_app(config=None):
    """
    Build the application. The config object is created once here and
    handed to every service; nothing reads configuration from globals.
    """
    config = config or get_config()

    app = Flask(__name__)
    app.config['ACCOUNT_CONFIG'] = config

    engine = make_engine(config)
    Base.metadata.create_all(engine)
    app.extensions['db_sessionmaker'] = sessionmaker(bind=engine)
    app.extensions['password_manager'] = PasswordManager(config)
    app.extensions['session_manager'] = SessionManager(config)

    app.register_blueprint(accounts_bp)
    register_error_handlers(app)
    app.after_request(add_security_headers)
    return app


def make_engine(config):
    if config.DATABASE_URL in ('sqlite://', 'sqlite:///:memory:'):
        # One shared connection, otherwise every checkout sees an empty DB
        return create_engine(
            config.DATABASE_URL,
            connect_args={'check_same_thread': False},
            poolclass=StaticPool,
            echo=config.DATABASE_ECHO,
        )
    return create_engine(
        config.DATABASE_URL,
        pool_pre_ping=True,
        echo=config.DATABASE_ECHO,
    )


# --- MIDDLEWARE / HELPERS ---
def get_db():
    return current_app.extensions['db_sessionmaker']()


def get_account_service(db) -> AccountService:
    return AccountService(
        db,
        current_app.config['ACCOUNT_CONFIG'],
        current_app.extensions['password_manager'],
    )


def signed_in_response(user, status_code):
    """Public fields + fresh token in the body, same token in the cookie"""
    sm = get_session_manager()
    token = sm.tokens.create_token(user.id)
    resp = make_response(jsonify({**user.to_public(), "token": token}), status_code)
    sm.set_session_cookie(resp, token)
    return resp


def add_security_headers(response):
    response.headers['X-Content-Type-Options'] = 'nosniff'
    response.headers['X-Frame-Options'] = 'DENY'
    response.headers['Content-Security-Policy'] = "default-src 'self'"
    return response


def register_error_handlers(app):
    @app.errorhandler(AccountError)
    def handle_account_error(e):
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(SQLAlchemyError)
    def handle_store_error(e):
        logger.exception("Store failure")
        return jsonify(InternalError().to_dict()), 500

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        if isinstance(e, HTTPException):
            return jsonify({"message": e.description}), e.code
        logger.exception("Unhandled error")
        return jsonify(InternalError().to_dict()), 500


# --- ROUTES ---

@accounts_bp.route('/health', methods=['GET'])
def health_check():
    return jsonify({"status": "ok"})


@accounts_bp.route('/register', methods=['POST'])
def register():
    data = get_json_body(request)
    db = get_db()
    try:
        user = get_account_service(db).register_user(
            data.get('name'), data.get('email'), data.get('password')
        )
        return signed_in_response(user, 201)
    finally:
        db.close()


@accounts_bp.route('/login', methods=['POST'])
def login():
    data = get_json_body(request)
    db = get_db()
    try:
        user = get_account_service(db).authenticate_user(
            data.get('email'), data.get('password')
        )
        return signed_in_response(user, 200)
    finally:
        db.close()


@accounts_bp.route('/logout', methods=['GET', 'POST'])
def logout():
    resp = make_response(jsonify({"message": "Successfully Logged Out"}))
    get_session_manager().clear_session_cookie(resp)
    logger.info(f"Session cookie cleared for {request.remote_addr}")
    return resp


@accounts_bp.route('/profile', methods=['GET'])
@login_required
def get_profile(caller_id):
    db = get_db()
    try:
        user = get_account_service(db).get_user(caller_id)
        return jsonify(user.to_public())
    finally:
        db.close()


@accounts_bp.route('/status', methods=['GET'])
def session_status():
    return jsonify(get_session_manager().is_authenticated(request))


@accounts_bp.route('/profile', methods=['PATCH'])
@login_required
def update_profile(caller_id):
    data = get_json_body(request)
    db = get_db()
    try:
        user = get_account_service(db).update_profile(caller_id, data)
        return jsonify(user.to_public())
    finally:
        db.close()


@accounts_bp.route('/password', methods=['PATCH'])
@login_required
def change_password(caller_id):
    data = get_json_body(request)
    db = get_db()
    try:
        get_account_service(db).change_password(
            caller_id, data.get('oldPassword'), data.get('password')
        )
        return jsonify({"message": "Password change successful"})
    finally:
        db.close()


if __name__ == "__main__":
    config = get_config()
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
    # Session cookies are Secure-only, so serve HTTPS even locally.
    # In production, run with Gunicorn + SSL
    create_app(config).run(ssl_context='adhoc', debug=False)
