"""Shared Flask extensions.

Instances are created here without an app and bound in `create_app` so that
models, services and blueprints can import them without circular imports.
"""

from flask_bcrypt import Bcrypt
from flask_mail import Mail
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()
migrate = Migrate()
bcrypt = Bcrypt()
mail = Mail()
