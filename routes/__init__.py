"""
routes/
Flask Blueprint registration for AstroLens.

Each sub-module defines a Blueprint containing related route handlers:

- **main**: Index page with the APOD widget painted in.
- **proxy**: Server-side APOD proxy that keeps the NASA key off the page.
"""

from routes.main import main_bp
from routes.proxy import proxy_bp


def register_blueprints(app):
    """Attach all route Blueprints to the Flask application instance."""
    app.register_blueprint(main_bp)
    app.register_blueprint(proxy_bp)
