import logging
from pathlib import Path
from typing import Any, Dict, Optional

from flask import Flask, g

from portal.config import config_by_name
from portal.discovery.folder import FolderDiscoverer

# Set up logging
logger = logging.getLogger(__name__)

def create_app(config_name: str, overrides: Optional[Dict[str, Any]] = None) -> Flask:
    """
    Creates and configures a Flask application using the app factory pattern.
    """
    portal_root = Path(__file__).parent
    app = Flask(
        __name__,
        template_folder=portal_root / "templates",
        static_folder=portal_root / "static",
    )
    app.config.from_object(config_by_name[config_name])
    if overrides:
        app.config.update(overrides)
    # Keep record fields in declaration order.
    app.json.sort_keys = False

    # Every request gets its own discoverer, so every listing rescans disk.
    @app.before_request
    def before_request():
        if 'server_discovery' not in g:
            g.server_discovery = FolderDiscoverer(
                Path(app.config['SERVERS_DIR']),
                readme_preview_bytes=app.config['README_PREVIEW_BYTES'],
            )

    # Register Blueprints
    from .ui.routes import ui_bp
    app.register_blueprint(ui_bp)

    from .api.routes import api_bp
    app.register_blueprint(api_bp, url_prefix='/api')

    logger.info(f"Flask App created with '{config_name}' config, scanning {app.config['SERVERS_DIR']}")

    return app
