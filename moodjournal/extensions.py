"""Extension singletons, bound to an app in ``init_extensions``."""

from pathlib import Path

from flask import Flask
from flask_bcrypt import Bcrypt
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_login import LoginManager
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy

MIGRATIONS_DIR = Path(__file__).resolve().parent / "migrations"

# Services hand back loaded entries after commit; keep their attributes readable.
db = SQLAlchemy(session_options={"expire_on_commit": False})
migrate = Migrate()
bcrypt = Bcrypt()

# Bearer tokens only: no remember-me cookie, no session fixation checks.
login_manager = LoginManager()
login_manager.session_protection = None

# Limits and storage come from RATELIMIT_* config keys.
limiter = Limiter(key_func=get_remote_address)


def init_extensions(app: Flask) -> None:
    db.init_app(app)
    migrate.init_app(app, db, directory=str(MIGRATIONS_DIR))
    login_manager.init_app(app)
    bcrypt.init_app(app)
    limiter.init_app(app)
