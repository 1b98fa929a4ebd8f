"""Tests for generated launch config, install steps and inspector command."""

from portal.discovery.snippets import (
    build_inspector_command,
    build_install_steps,
    build_launch_config,
    is_anchored,
)


def test_default_launch_config(make_server, discoverer):
    make_server("srv")
    server = discoverer.get_by_id("srv")

    config = build_launch_config(server)

    assert config == {
        "mcpServers": {
            "srv": {"command": "node", "args": [f"{server.path}/build/index.js"], "env": {}},
        }
    }


def test_relative_args_get_server_path(make_server, discoverer):
    make_server("srv", config={
        "id": "custom",
        "configuration": {"claude_desktop": {
            "command": "python",
            "args": ["server.py", "/opt/other.py", "--verbose", "lib/main.js"],
            "env": {"API_KEY": "x"},
        }},
    })
    server = discoverer.get_by_id("custom")

    launch = build_launch_config(server)["mcpServers"]["custom"]

    assert launch["command"] == "python"
    assert launch["args"] == [f"{server.path}/server.py", "/opt/other.py", "--verbose", f"{server.path}/lib/main.js"]
    assert launch["env"] == {"API_KEY": "x"}


def test_launch_config_does_not_mutate_record(make_server, discoverer):
    make_server("srv", config={"configuration": {"claude_desktop": {"command": "node", "args": ["a.js"]}}})
    server = discoverer.get_by_id("srv")

    build_launch_config(server)

    assert server.configuration["claude_desktop"]["args"] == ["a.js"]


def test_is_anchored():
    assert is_anchored("/usr/local/bin/server.js")
    assert is_anchored("~/servers/index.js")
    assert is_anchored("C:\\server\\index.js")
    assert is_anchored("-m")
    assert is_anchored("--verbose")
    assert not is_anchored("index.js")
    assert not is_anchored("build/index.js")


def test_install_steps_are_bracketed_and_numbered(make_server, discoverer):
    make_server("srv")
    server = discoverer.get_by_id("srv")

    steps = build_install_steps(server)

    assert [step["number"] for step in steps] == [1, 2, 3, 4]
    assert steps[0]["title"] == "Navigate to server directory"
    assert steps[0]["command"] == f"cd {server.path}"
    assert [step["command"] for step in steps[1:3]] == ["npm install", "npm run build"]
    assert steps[-1]["title"] == "Add to Claude Desktop"
    assert "command" not in steps[-1]


def test_install_steps_use_configured_steps(make_server, discoverer):
    make_server("srv", config={"installation": {"steps": [{"title": "Only step", "description": "d"}]}})
    server = discoverer.get_by_id("srv")

    titles = [step["title"] for step in build_install_steps(server)]

    assert titles == ["Navigate to server directory", "Only step", "Add to Claude Desktop"]


def test_inspector_command(make_server, discoverer):
    make_server("srv", config={"inspector": {"command": "npx inspector python server.py"}})
    server = discoverer.get_by_id("srv")

    assert build_inspector_command(server) == f'cd "{server.path}" && npx inspector python server.py'
