"""
options.py

Responsibility: Turn the raw argument list (plus environment and optional project
defaults) into a single typed `Options` record.

Precedence, per value:
- explicit flag
- environment variable (API key, API URL, timeout)
- `.readmeforge.yml` project defaults (template, language, tone, emoji, output)
- built-in default

Help and version requests are detected up front by `short_circuit` so they win
regardless of where they appear in argv.
"""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass
from typing import TYPE_CHECKING, Mapping, Sequence

if TYPE_CHECKING:
    from readmeforge.project_config import ProjectDefaults

PROG = "readmeforge"

TEMPLATES = ("standard", "minimal", "detailed")
LANGUAGES = ("en", "ru", "es", "de", "fr", "zh", "ja")
TONES = ("professional", "friendly", "casual", "technical")

DEFAULT_TEMPLATE = "standard"
DEFAULT_LANGUAGE = "en"
DEFAULT_TONE = "professional"
DEFAULT_OUTPUT = "README.md"
DEFAULT_API_BASE = "https://www.readmeforge.app"
DEFAULT_TIMEOUT = 120.0

API_KEY_ENV = "READMEFORGE_API_KEY"
API_URL_ENV = "READMEFORGE_API_URL"
TIMEOUT_ENV = "READMEFORGE_TIMEOUT"

# Every spelling of a value-taking flag, mapped to its long form.
VALUE_FLAGS = {
    "-k": "--key",
    "--key": "--key",
    "-r": "--repo",
    "--repo": "--repo",
    "-t": "--template",
    "--template": "--template",
    "-l": "--language",
    "--language": "--language",
    "--tone": "--tone",
    "-o": "--output",
    "--output": "--output",
}

HELP_FLAGS = ("-h", "--help")
VERSION_FLAGS = ("-v", "--version")


class ConfigurationError(ValueError):
    pass


@dataclass(frozen=True)
class Options:
    """Resolved settings for a single invocation."""

    api_key: str
    repo_url: str | None = None
    template: str = DEFAULT_TEMPLATE
    language: str = DEFAULT_LANGUAGE
    tone: str = DEFAULT_TONE
    include_emoji: bool = True
    output: str = DEFAULT_OUTPUT
    force: bool = False
    verbose: bool = False
    api_base: str = DEFAULT_API_BASE
    timeout: float = DEFAULT_TIMEOUT


class _ArgumentParser(argparse.ArgumentParser):
    """argparse parser that reports problems as ConfigurationError instead of exiting with 2."""

    def error(self, message: str) -> None:  # type: ignore[override]
        raise ConfigurationError(message)


def short_circuit(argv: Sequence[str]) -> str | None:
    """
    Return "help" or "version" if argv asks for either, else None.

    Tokens are scanned left to right and the first match wins. An empty argv is
    treated as a help request.
    """
    if not argv:
        return "help"
    for arg in argv:
        if arg in HELP_FLAGS:
            return "help"
        if arg in VERSION_FLAGS:
            return "version"
    return None


def build_parser() -> argparse.ArgumentParser:
    # Help is rendered by usage.py; argparse only validates and collects values.
    p = _ArgumentParser(prog=PROG, add_help=False, allow_abbrev=False)
    p.add_argument("-k", "--key", default=None)
    p.add_argument("-r", "--repo", default=None)
    p.add_argument("-t", "--template", choices=TEMPLATES, default=None)
    p.add_argument("-l", "--language", choices=LANGUAGES, default=None)
    p.add_argument("--tone", choices=TONES, default=None)
    p.add_argument("--no-emoji", dest="include_emoji", action="store_false", default=None)
    p.add_argument("-o", "--output", default=None)
    p.add_argument("-f", "--force", action="store_true")
    p.add_argument("--verbose", action="store_true")
    return p


def _attach_values(argv: Sequence[str]) -> list[str]:
    """
    Rewrite `flag value` pairs as `--flag=value` so values starting with "-" are
    taken as-is. A value flag with nothing after it is left for argparse to reject.
    """
    out: list[str] = []
    i = 0
    while i < len(argv):
        arg = argv[i]
        if arg in VALUE_FLAGS and i + 1 < len(argv):
            out.append(f"{VALUE_FLAGS[arg]}={argv[i + 1]}")
            i += 2
            continue
        out.append(arg)
        i += 1
    return out


def _first(*values: object) -> object:
    for v in values:
        if v is not None:
            return v
    return None


def _parse_timeout(raw: str | None) -> float:
    if raw is None or not raw.strip():
        return DEFAULT_TIMEOUT
    try:
        value = float(raw)
    except ValueError as e:
        raise ConfigurationError(f"{TIMEOUT_ENV} must be a number of seconds, got {raw!r}") from e
    if value <= 0:
        raise ConfigurationError(f"{TIMEOUT_ENV} must be greater than zero, got {raw!r}")
    return value


def resolve_options(
    argv: Sequence[str],
    *,
    env: Mapping[str, str] | None = None,
    defaults: ProjectDefaults | None = None,
) -> Options:
    """
    Parse argv into `Options`.

    Raises ConfigurationError for unknown flags, missing flag values, values
    outside the accepted choices, and a missing API key. The repository URL is
    left as None when not given; auto-detection is the caller's job.
    """
    env = os.environ if env is None else env
    args = build_parser().parse_args(_attach_values(argv))

    api_key = (args.key or env.get(API_KEY_ENV) or "").strip()
    if not api_key:
        raise ConfigurationError(f"API key required. Use -k or set {API_KEY_ENV} env var.")

    template = args.template or (defaults.template if defaults else None) or DEFAULT_TEMPLATE
    language = args.language or (defaults.language if defaults else None) or DEFAULT_LANGUAGE
    tone = args.tone or (defaults.tone if defaults else None) or DEFAULT_TONE
    output = args.output or (defaults.output if defaults else None) or DEFAULT_OUTPUT
    include_emoji = _first(args.include_emoji, defaults.include_emoji if defaults else None, True)

    api_base = (env.get(API_URL_ENV) or "").strip().rstrip("/") or DEFAULT_API_BASE

    return Options(
        api_key=api_key,
        repo_url=(args.repo or "").strip() or None,
        template=template,
        language=language,
        tone=tone,
        include_emoji=bool(include_emoji),
        output=output,
        force=bool(args.force),
        verbose=bool(args.verbose),
        api_base=api_base,
        timeout=_parse_timeout(env.get(TIMEOUT_ENV)),
    )
