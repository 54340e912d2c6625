"""
cli.py

Responsibility: CLI entrypoint for readmeforge.

High-level flow (single command):
1) Resolve argv + environment + project defaults -> `Options`
2) Determine the repository URL (flag, else `origin` remote)
3) Refuse to clobber an existing output file unless --force
4) Ask the ReadmeForge service for a README
5) Write it to disk and report remaining credits

This module should orchestrate behavior but keep concerns isolated:
- Option parsing: `options.py` / `project_config.py`
- Git remote lookup: `git_remote.py`
- HTTP API: `client.py`
- Terminal output: `console.py` / `usage.py`
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Sequence

from readmeforge import __version__
from readmeforge.client import ReadmeForgeClient, RequestError
from readmeforge.console import Console
from readmeforge.git_remote import detect_repo_url
from readmeforge.options import ConfigurationError, Options, resolve_options, short_circuit
from readmeforge.project_config import load_project_defaults
from readmeforge.usage import render_usage

logger = logging.getLogger(__name__)


class OutputError(RuntimeError):
    pass


class CollisionError(OutputError):
    pass


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, stream=sys.stderr, format="%(levelname)s [%(name)s] %(message)s")
    # Quiet third-party libraries unless verbose
    logging.getLogger("urllib3").setLevel(logging.DEBUG if verbose else logging.WARNING)


def _check_collision(path: Path, display_name: str, *, force: bool) -> None:
    if path.exists() and not force:
        raise CollisionError(f"{display_name} already exists. Use -f to overwrite.")


def _write_output(path: Path, text: str) -> None:
    """
    Write the README exactly as received (no newline translation).
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8", newline="")
    except OSError as e:
        raise OutputError(f"Could not write {path}: {e}") from e
    logger.debug("Wrote %d characters to %s", len(text), path)


def generate_cmd(options: Options, *, console: Console, cwd: Path) -> int:
    repo_url = options.repo_url or detect_repo_url(cwd)
    if not repo_url:
        raise ConfigurationError("Could not detect repo. Use -r to specify GitHub URL.")

    output_path = (cwd / options.output).resolve()
    _check_collision(output_path, options.output, force=options.force)

    console.blank()
    console.header("ReadmeForge CLI")
    console.blank()
    console.detail(f"Repository: {repo_url}")
    console.detail(f"Template: {options.template}")
    console.detail(f"Language: {options.language}")
    console.detail(f"Tone: {options.tone}")
    console.blank()
    console.step("Generating README...")

    client = ReadmeForgeClient(options.api_key, options.api_base, timeout=options.timeout)
    result = client.generate(
        repo_url,
        template=options.template,
        language=options.language,
        tone=options.tone,
        include_emoji=options.include_emoji,
    )

    _write_output(output_path, result.readme)

    credits = result.credits_remaining if result.credits_remaining is not None else "unknown"
    console.blank()
    console.success("README generated successfully!")
    console.detail(f"  Saved to: {output_path}")
    console.detail(f"  Credits remaining: {credits}")
    console.blank()
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    console = Console()

    request = short_circuit(args)
    if request == "help":
        console.markup(render_usage())
        return 0
    if request == "version":
        console.plain(__version__)
        return 0

    try:
        cwd = Path.cwd()
        options = resolve_options(args, defaults=load_project_defaults(cwd))
        setup_logging(options.verbose)
        return generate_cmd(options, console=console, cwd=cwd)
    except (ConfigurationError, OutputError, RequestError) as e:
        console.error(str(e))
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
