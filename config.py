"""
config.py
Application configuration, constants, and YAML config loader for AstroLens.

This module contains all static configuration and constants used across the
application. It has no dependencies on Flask, requests, or any other heavy
libraries, so every other module can safely import from here.
"""

import os
import logging
import yaml

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
BASE_DIR = os.path.dirname(os.path.abspath(__file__))

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s',
)
logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# NASA APOD endpoints
# ---------------------------------------------------------------------------
APOD_URL = 'https://api.nasa.gov/planetary/apod'
MANAGED_PROXY_PATH = '/.netlify/functions/apod'
LOCAL_PROXY_PATH = '/api/apod'

# Last-resort key for the client-side fetch. NASA's public demo key is heavily
# rate limited and visible to anyone who reads this file.
FALLBACK_API_KEY = 'DEMO_KEY'

# Seconds per HTTP request, applied to every tier and to the proxy upstream.
DEFAULT_TIMEOUT = 10

# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------
EXPLANATION_MAX_CHARS = 200
DEFAULT_TITLE = 'NASA APOD'
PLACEHOLDER_TEXT = 'Unable to load NASA APOD.'


# ---------------------------------------------------------------------------
# YAML config loader
# ---------------------------------------------------------------------------
def load_config(config_file='config.yaml'):
    """Load application settings from a YAML config file.

    Parameters
    ----------
    config_file : str
        Path to the YAML file. Relative paths are resolved against BASE_DIR.

    Returns
    -------
    dict
        Parsed configuration, or an empty dict if the file is missing or invalid.
    """
    try:
        cfg_path = (
            config_file
            if os.path.isabs(config_file)
            else os.path.join(BASE_DIR, config_file)
        )
        with open(cfg_path, 'r') as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"expected a mapping, got {type(data).__name__}")
        return data
    except Exception as e:
        logger.warning(f"Error loading configuration: {str(e)}. Using default values.")
        return {}


CONFIG = load_config()


# Accessors below read CONFIG and the environment on every call.
def site_url(config=None):
    """Root URL of the deployment serving the APOD proxy paths, or None.

    Without it the widget skips both proxy sources.
    """
    cfg = CONFIG if config is None else config
    return cfg.get('site_url') or None


def meta_api_key(config=None):
    """Key written into the page's ``nasa-api-key`` meta tag, or None."""
    cfg = CONFIG if config is None else config
    return cfg.get('meta_api_key') or None


def request_timeout(config=None):
    """Per-request timeout in seconds, from ``request_timeout`` or the default."""
    cfg = CONFIG if config is None else config
    try:
        value = float(cfg.get('request_timeout', DEFAULT_TIMEOUT))
    except (TypeError, ValueError):
        logger.warning("Invalid request_timeout in config, using default.")
        return DEFAULT_TIMEOUT
    return value if value > 0 else DEFAULT_TIMEOUT


def client_api_key(config=None):
    """Development-only key exposed to the page, or None.

    ``CLIENT_NASA_API_KEY`` and ``NASA_CLIENT_API_KEY`` win over the
    ``client_api_key`` entry of config.yaml.
    """
    cfg = CONFIG if config is None else config
    return (
        os.getenv('CLIENT_NASA_API_KEY')
        or os.getenv('NASA_CLIENT_API_KEY')
        or cfg.get('client_api_key')
        or None
    )


def server_api_key(config=None):
    """Secret key held by the proxy: ``NASA_API_KEY`` env var, then config.yaml."""
    cfg = CONFIG if config is None else config
    return os.getenv('NASA_API_KEY') or cfg.get('nasa_api_key') or None
