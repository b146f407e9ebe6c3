"""
app.py
Flask entry point for AstroLens: the index page with the APOD widget and the
APOD proxy endpoints.
"""

from flask import Flask

from config import BASE_DIR
from routes import register_blueprints


def create_app():
    """Build the Flask application with every route Blueprint attached."""
    flask_app = Flask(__name__, root_path=BASE_DIR)
    register_blueprints(flask_app)
    return flask_app


app = create_app()


if __name__ == '__main__':
    app.run(debug=True)
