from .claims import claims_bp

def register_blueprints(app):
    """Register all blueprints with the Flask app"""
    app.register_blueprint(claims_bp)
