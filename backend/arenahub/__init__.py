from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_bcrypt import Bcrypt
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import click
from arenahub.config import Config

db = SQLAlchemy()
bcrypt = Bcrypt()
migrate = Migrate()
socketio = SocketIO(async_mode=None)


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    origins = flask_app.config.get('CORS_ORIGINS') or []

    db.init_app(flask_app)
    bcrypt.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, origins=origins)
    socketio.init_app(flask_app, cors_allowed_origins=origins)

    # Ledger backend and domain service, one per app
    from arenahub import models  # noqa: F401
    from arenahub.store import make_store
    from arenahub.services.leaderboard.service import LeaderboardService
    store = make_store(flask_app.config.get('LEADERBOARD_STORE'))
    flask_app.extensions['leaderboard'] = LeaderboardService.from_config(
        store, flask_app.config, bcrypt=bcrypt, logger=flask_app.logger
    )
    flask_app.logger.info(f"[startup] leaderboard store={type(store).__name__}")
    if not flask_app.extensions['leaderboard'].admin.configured:
        flask_app.logger.warning("[startup] no ADMIN_PASSWORD or ADMIN_PASSWORD_HASH set; resets are disabled")

    from arenahub.main import main
    flask_app.register_blueprint(main)

    from arenahub.api.leaderboard import leaderboard
    flask_app.register_blueprint(leaderboard)

    from arenahub.socketio_events import register_socketio_handlers
    register_socketio_handlers()

    @click.command('db-reset')
    def db_reset_command():
        """Drops and recreates the leaderboard tables."""
        with flask_app.app_context():
            db.drop_all()
            db.create_all()
            print('Database has been reset!')

    @click.command('hash-admin-password')
    @click.argument('password')
    def hash_admin_password_command(password):
        """Prints a bcrypt hash to use as ADMIN_PASSWORD_HASH."""
        print(bcrypt.generate_password_hash(password).decode('utf-8'))

    flask_app.cli.add_command(db_reset_command)
    flask_app.cli.add_command(hash_admin_password_command)

    return flask_app
