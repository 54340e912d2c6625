"""
readmeforge package

Command-line client for the ReadmeForge README generation service.

Key responsibilities are split across modules:
- `options.py`: parse argv + environment into a typed `Options` record
- `project_config.py`: optional per-repository defaults from `.readmeforge.yml`
- `git_remote.py`: derive the GitHub URL from the local `origin` remote
- `client.py`: isolated ReadmeForge HTTP API interaction (one POST)
- `usage.py`: render the help screen
- `console.py`: colourised terminal output
- `cli.py`: CLI entrypoint and orchestration (resolve -> detect -> generate -> write)
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "1.0.0"
