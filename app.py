from flask import Flask, jsonify
from extensions import db, migrate, cors
from dotenv import load_dotenv
import os

# 提前导入模型注册函数（明确显示依赖关系）
from models import register_models

from blueprints.guests import guests_bp
from blueprints.rsvp import rsvp_bp
from blueprints.dashboard import dashboard_bp
from blueprints.invite_tool import invite_tool_bp, STORE_EXTENSION_KEY
from utils.invite_store import InviteToolStore
from utils.log import setup_logging

load_dotenv()

DEFAULT_DB_URI = 'sqlite:///wedding.db'


def create_app(test_config=None, invite_store=None):
    app = Flask(__name__)

    # ===== 配置 =====
    app.config.update(
        SECRET_KEY=os.getenv('SECRET_KEY'),
        SQLALCHEMY_DATABASE_URI=os.getenv('DB_URI') or DEFAULT_DB_URI,
        SQLALCHEMY_TRACK_MODIFICATIONS=False,
        INVITE_TOOL_STATE_PATH=os.getenv('INVITE_TOOL_STATE_PATH', 'invite_tool_state.json'),
        SHARE_BASE_URL=os.getenv('SHARE_BASE_URL', ''),
        COUPLE_NAMES=os.getenv('COUPLE_NAMES', 'Kusyanto & Dini Jumartini'),
        EVENT_DATE=os.getenv('EVENT_DATE', 'Saturday, 12 April 2025'),
        EVENT_LOCATION=os.getenv('EVENT_LOCATION', 'Graha Saba Buana, Surakarta'),
        LOG_LEVEL=os.getenv('LOG_LEVEL', 'INFO'),
        LOG_FILE=os.getenv('LOG_FILE'),
        AUTO_CREATE_TABLES=os.getenv('AUTO_CREATE_TABLES', 'True') == 'True',
    )
    if test_config:
        app.config.update(test_config)

    logger = setup_logging(app)
    if not os.getenv('DB_URI') and not (test_config or {}).get('SQLALCHEMY_DATABASE_URI'):
        logger.warning(f"DB_URI is not configured, falling back to {DEFAULT_DB_URI}")

    # ===== 初始化扩展 =====
    db.init_app(app)
    migrate.init_app(app, db)
    cors.init_app(app, resources={r'/api/*': {'origins': '*'}})

    # 邀请工具状态存储（显式构造，可注入）
    app.extensions[STORE_EXTENSION_KEY] = invite_store or InviteToolStore(
        app.config['INVITE_TOOL_STATE_PATH']
    )

    with app.app_context():
        register_models()  # 确保在应用上下文中注册
        if app.config['AUTO_CREATE_TABLES']:
            db.create_all()

    # ===== 注册蓝图 =====
    blueprints = [
        guests_bp,
        rsvp_bp,
        dashboard_bp,
        invite_tool_bp,
    ]
    for bp in blueprints:
        app.register_blueprint(bp)

    # 健康检查
    @app.route('/')
    def health_check():
        return jsonify({'status': 'healthy'})

    return app


if __name__ == '__main__':
    app = create_app()
    app.run(host='0.0.0.0', port=5000)
