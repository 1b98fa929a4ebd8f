#!/usr/bin/env python3
"""
Run the MCP server portal with Flask's built-in server.
"""
import logging
import os
from pathlib import Path

from dotenv import load_dotenv

from portal import create_app
from portal.discovery.folder import FolderDiscoverer

logger = logging.getLogger(__name__)


def _env_overrides() -> dict:
    """Settings from the environment (or .env), read after load_dotenv()."""
    overrides = {}
    if os.environ.get('PORTAL_SERVERS_DIR'):
        overrides['SERVERS_DIR'] = Path(os.environ['PORTAL_SERVERS_DIR'])
    if os.environ.get('PORTAL_README_PREVIEW_BYTES'):
        overrides['README_PREVIEW_BYTES'] = int(os.environ['PORTAL_README_PREVIEW_BYTES'])
    if os.environ.get('PORT'):
        overrides['PORT'] = int(os.environ['PORT'])
    return overrides


def main():
    load_dotenv()
    logging.basicConfig(level=os.environ.get('PORTAL_LOG_LEVEL', 'INFO').upper())

    app = create_app(os.environ.get('PORTAL_ENV', 'development'), overrides=_env_overrides())

    logger.info(f"MCP Server Portal running on http://localhost:{app.config['PORT']}")
    logger.info(f"Scanning servers from: {app.config['SERVERS_DIR']}")
    servers = FolderDiscoverer(app.config['SERVERS_DIR'], app.config['README_PREVIEW_BYTES']).list_all()
    logger.info(f"Found {len(servers)} MCP server(s)")
    for server in servers:
        logger.info(f"  - {server.name} ({server.version})")

    app.run(host=os.environ.get('HOST', '127.0.0.1'), port=app.config['PORT'], debug=app.config['DEBUG'])


if __name__ == "__main__":
    main()
