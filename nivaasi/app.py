import logging

from flask import Flask

from nivaasi import __version__
from nivaasi.config import Config, db, migrate, jwt, bcrypt, cors
from nivaasi.errors import register_error_handlers
from nivaasi.validators import utcnow
from nivaasi import models  # noqa: F401  (registers tables on db.metadata)
from nivaasi.routes.auth import auth_bp
from nivaasi.routes.users import users_bp
from nivaasi.routes.properties import properties_bp
from nivaasi.routes.tenants import tenants_bp
from nivaasi.routes.owners import owners_bp
from nivaasi.routes.payments import payments_bp
from nivaasi.routes.maintenance import maintenance_bp
from nivaasi.routes.notifications import notifications_bp, reminders_bp

logger = logging.getLogger(__name__)

BLUEPRINTS = (
    auth_bp,
    users_bp,
    properties_bp,
    tenants_bp,
    owners_bp,
    payments_bp,
    maintenance_bp,
    notifications_bp,
    reminders_bp,
)


def create_app(overrides=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if overrides:
        app.config.update(overrides)

    logging.basicConfig(level=app.config['LOG_LEVEL'])
    app.json.compact = False

    origins = [o.strip() for o in app.config['CORS_ORIGINS'].split(',') if o.strip()]
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    bcrypt.init_app(app)
    cors.init_app(app, resources={r"/api/*": {"origins": origins}}, supports_credentials=True)

    # Register blueprints
    for blueprint in BLUEPRINTS:
        app.register_blueprint(blueprint)
    register_error_handlers(app)

    @app.route('/')
    def home():
        return {
            'message': 'Nivaasi API',
            'version': __version__,
            'endpoints': {
                'signup': 'POST /api/auth/signup',
                'signin': 'POST /api/auth/signin',
                'owner_dashboard': 'GET /api/owners/dashboard',
                'tenant_dashboard': 'GET /api/tenants/dashboard',
                'health': 'GET /health'
            }
        }

    @app.route('/health')
    def health():
        payload = {
            'status': 'OK',
            'message': 'Server is running',
            'timestamp': utcnow().isoformat(),
            'environment': app.config['NIVAASI_ENV']
        }
        logger.debug(f"Health check hit: {payload}")
        return payload, 200

    with app.app_context():
        # Create tables
        db.create_all()

    return app
