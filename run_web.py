#!/usr/bin/env python
"""Web server startup script for local development."""

import os
import sys
from pathlib import Path

from formbuilder.config import Settings
from formbuilder.errors import ConfigException


def main():
    """Start the form builder API."""
    config_path = sys.argv[1] if len(sys.argv) > 1 else "config.toml"

    if not Path(config_path).exists():
        print(f"Configuration file not found: {config_path}, using defaults")

    try:
        settings = Settings.load(config_path)
    except ConfigException as e:
        print(e)
        sys.exit(1)

    host = settings.web.host
    port = settings.web.port

    print(f"Starting form builder API on http://{host}:{port}")
    print("Press Ctrl+C to stop")

    os.environ["CONFIG_FILE"] = config_path

    import uvicorn

    uvicorn.run(
        "formbuilder.api:create_app",
        host=host,
        port=port,
        factory=True,
        reload=False,
    )


if __name__ == "__main__":
    main()
