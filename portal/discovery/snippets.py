"""
Copy-and-paste snippets generated for a discovered server: the launch
configuration for an MCP client, the install walkthrough and the inspector
command.
"""
import re
from typing import Any, Dict, List

from portal.core.models import InstallStep, ServerRecord
from portal.discovery.folder import DEFAULT_INSPECTOR_COMMAND

# POSIX absolute, home-relative, UNC or drive-letter paths, and flags.
ANCHORED_ARG = re.compile(r'^(?:[/~\\-]|[A-Za-z]:[\\/])')


def _posix_path(record: ServerRecord) -> str:
    return record.path.replace('\\', '/')


def is_anchored(arg: Any) -> bool:
    """Absolute paths and flags are passed through; relative paths get the server path."""
    if not isinstance(arg, str):
        return True
    return bool(ANCHORED_ARG.match(arg))


def build_launch_config(record: ServerRecord) -> Dict[str, Any]:
    """Return an `mcpServers` block keyed by the server id."""
    server_path = _posix_path(record)
    template = record.configuration.get('claude_desktop')
    if not isinstance(template, dict):
        template = {
            'command': 'node',
            'args': [f'{server_path}/build/index.js'],
            'env': {},
        }

    launch = dict(template)
    launch['args'] = [
        arg if is_anchored(arg) else f'{server_path}/{arg}'
        for arg in template.get('args') or []
    ]
    launch.setdefault('env', {})
    return {'mcpServers': {record.id: launch}}


def build_install_steps(record: ServerRecord) -> List[Dict[str, Any]]:
    """Number the server's install steps between a `cd` step and a final hand-off step."""
    steps = [InstallStep(
        title='Navigate to server directory',
        command=f'cd {record.path}',
        description='Open a terminal in the server folder',
    )]
    steps.extend(record.installation.steps)
    steps.append(InstallStep(
        title='Add to Claude Desktop',
        description='Copy the configuration above and add it to your Claude Desktop settings.',
    ))
    return [dict(step.to_dict(), number=number) for number, step in enumerate(steps, 1)]


def build_inspector_command(record: ServerRecord) -> str:
    command = record.inspector.command or DEFAULT_INSPECTOR_COMMAND
    return f'cd "{record.path}" && {command}'
