from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_jwt_extended import JWTManager
from family_logbook.utils.cache import ResolvedPageCache

db = SQLAlchemy()
migrate = Migrate()
jwt = JWTManager()

# Effective sections per (logbook_id, page_type), invalidated on every write
page_cache = ResolvedPageCache()
