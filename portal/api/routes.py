import logging

from flask import Blueprint, jsonify, g

from portal.core.errors import NotFound
from portal.discovery.snippets import (
    build_inspector_command,
    build_install_steps,
    build_launch_config,
)

api_bp = Blueprint('api', __name__)
logger = logging.getLogger(__name__)

@api_bp.errorhandler(NotFound)
def handle_not_found(e):
    return jsonify({'error': str(e)}), 404

@api_bp.route('/servers', methods=['GET'])
def list_servers():
    """API endpoint to list all discovered servers."""
    servers = g.server_discovery.list_all()
    return jsonify([server.to_dict() for server in servers])

@api_bp.route('/servers/<server_id>', methods=['GET'])
def get_server(server_id):
    """API endpoint to get one server."""
    server = g.server_discovery.get_by_id(server_id)
    return jsonify(server.to_dict())

@api_bp.route('/servers/<server_id>/readme', methods=['GET'])
def get_readme(server_id):
    """API endpoint to get a server's full README."""
    content = g.server_discovery.get_readme(server_id)
    return jsonify({'content': content})

@api_bp.route('/servers/<server_id>/config', methods=['GET'])
def get_launch_config(server_id):
    """API endpoint to get the client launch configuration for a server."""
    server = g.server_discovery.get_by_id(server_id)
    return jsonify(build_launch_config(server))

@api_bp.route('/servers/<server_id>/install', methods=['GET'])
def get_install_steps(server_id):
    server = g.server_discovery.get_by_id(server_id)
    return jsonify({'steps': build_install_steps(server)})

@api_bp.route('/servers/<server_id>/inspector', methods=['GET'])
def get_inspector(server_id):
    """API endpoint to get the MCP Inspector command and examples for a server."""
    server = g.server_discovery.get_by_id(server_id)
    inspector = server.inspector
    return jsonify({
        'enabled': inspector.enabled,
        'command': build_inspector_command(server),
        'description': inspector.description,
        'examples': [
            {'tool': example.tool, 'description': example.description, 'params': example.params}
            for example in inspector.examples
        ],
    })
