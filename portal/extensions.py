from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_login import LoginManager
from flask_babel import Babel


"""
Application extensions.

db: single SQLAlchemy instance holding landlords, apartments and bookings.
login_manager: binds a Landlord to the browser session.
"""

db = SQLAlchemy()
migrate = Migrate()
login_manager = LoginManager()
babel = Babel()
