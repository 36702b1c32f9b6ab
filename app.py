#!/usr/bin/env python3
"""
Widget Claims
A Flask application that hands out free stream widgets in exchange for a confirmed email address.
"""

from types import SimpleNamespace
from dotenv import load_dotenv
from flask import Flask
from flask_migrate import Migrate
from werkzeug.middleware.proxy_fix import ProxyFix

# Import our modules
from settings import Settings
from models import db
from routes import register_blueprints
from services import WidgetCatalog, ClaimStore, RateLimiter, KitClient, ClaimService, DownloadGate
from utils.banner import print_startup_banner

# Load environment variables from .env file
load_dotenv()

def create_app(settings=None, catalog=None, gateway=None):
    """Application factory pattern

    `catalog` and `gateway` replace the file catalog and the Kit client, for tests.
    """
    app = Flask(__name__, static_folder='static', static_url_path='/public')

    # Relative paths are resolved against the project directory, on a copy
    settings = (settings or Settings.from_env()).resolved(app.root_path)

    # Print startup banner (will show in both dev and production)
    print_startup_banner(settings)

    # Configuration
    app.config['SECRET_KEY'] = settings.secret_key
    app.config['SQLALCHEMY_DATABASE_URI'] = settings.database_url
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    app.config['SETTINGS'] = settings

    if settings.trust_proxy:
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1)

    # Initialize extensions
    db.init_app(app)
    Migrate(app, db)

    # Wire up the claim lifecycle
    store = ClaimStore()
    claims = ClaimService(
        settings,
        catalog or WidgetCatalog(settings.widgets_path),
        gateway or KitClient(settings),
        store,
        RateLimiter(store)
    )
    app.extensions['widget_claims'] = SimpleNamespace(
        catalog=claims.catalog,
        claims=claims,
        gate=DownloadGate(claims)
    )

    # Register blueprints
    register_blueprints(app)

    # Context processor for templates
    @app.context_processor
    def inject_template_vars():
        """Make common variables available in all templates"""
        return {
            'brand_name': settings.brand_name,
            'support_email': settings.support_email,
            'guide_url': settings.guide_url,
            'shop_url': settings.shop_url
        }

    # Database migrations are handled by Flask-Migrate
    # Run: flask db upgrade (in production)

    return app

# Create the application
app = create_app()

if __name__ == '__main__':
    # Local development: create the table if migrations have not been run
    with app.app_context():
        db.create_all()
    app.run(debug=True, host='0.0.0.0', port=app.config['SETTINGS'].port)
