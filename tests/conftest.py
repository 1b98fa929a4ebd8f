"""Shared fixtures for portal and time server tests."""

import json
from datetime import datetime, timezone
from pathlib import Path

import pytest

from portal import create_app
from portal.discovery.folder import FolderDiscoverer
from time_server.logger import IServiceLogger
from time_server.service import TimeService
from time_server.zones import ZoneCalendar

# Monday, mid-January: no DST in the northern hemisphere, DST in Sydney.
FIXED_NOW = datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)

_DEFAULT = object()


class RecordingLogger(IServiceLogger):
    """Keeps log entries in memory."""

    def __init__(self):
        self.entries = []

    def log(self, level, message, data=None):
        self.entries.append((level, message, data))


@pytest.fixture
def servers_dir(tmp_path):
    root = tmp_path / "servers"
    root.mkdir()
    return root


@pytest.fixture
def make_server(servers_dir):
    """Create a server folder; pass manifest=None to omit package.json."""

    def _make(folder, manifest=_DEFAULT, config=None, readme=None):
        server_dir = servers_dir / folder
        server_dir.mkdir()
        if manifest is _DEFAULT:
            manifest = {"name": folder, "version": "0.1.0", "description": f"{folder} description"}
        if manifest is not None:
            text = manifest if isinstance(manifest, str) else json.dumps(manifest)
            (server_dir / "package.json").write_text(text, encoding="utf-8")
        if config is not None:
            text = config if isinstance(config, str) else json.dumps(config)
            (server_dir / "mcp-config.json").write_text(text, encoding="utf-8")
        if readme is not None:
            (server_dir / "README.md").write_text(readme, encoding="utf-8")
        return server_dir

    return _make


@pytest.fixture
def discoverer(servers_dir):
    return FolderDiscoverer(servers_dir)


@pytest.fixture
def app(servers_dir):
    return create_app('testing', overrides={'SERVERS_DIR': servers_dir})


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def recording_logger():
    return RecordingLogger()


@pytest.fixture
def time_service(recording_logger):
    return TimeService(calendar=ZoneCalendar(clock=lambda: FIXED_NOW), logger=recording_logger)


@pytest.fixture
def repo_root():
    return Path(__file__).parent.parent
