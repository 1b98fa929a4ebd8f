#!/usr/bin/env python3
"""
Launcher so MCP clients can start the time server from this folder.
"""
from time_server.server_stdio import run

if __name__ == "__main__":
    run()
