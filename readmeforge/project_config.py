"""
project_config.py

Responsibility: Load optional per-repository defaults from `.readmeforge.yml`.

The file is a flat YAML mapping. Only non-secret settings are accepted; the API
key must come from the command line or the environment.

Example:

    template: minimal
    language: de
    tone: friendly
    include_emoji: false
    output: docs/README.md
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from readmeforge.options import LANGUAGES, TEMPLATES, TONES, ConfigurationError

CONFIG_FILENAMES = (".readmeforge.yml", ".readmeforge.yaml")

_CHOICES: dict[str, tuple[str, ...]] = {
    "template": TEMPLATES,
    "language": LANGUAGES,
    "tone": TONES,
}
_KNOWN_KEYS = ("template", "language", "tone", "include_emoji", "output")


@dataclass(frozen=True)
class ProjectDefaults:
    """Defaults read from the project config file; None means "not set"."""

    template: str | None = None
    language: str | None = None
    tone: str | None = None
    include_emoji: bool | None = None
    output: str | None = None
    source: Path | None = None


def find_config_file(cwd: str | Path) -> Path | None:
    base = Path(cwd)
    for name in CONFIG_FILENAMES:
        candidate = base / name
        if candidate.is_file():
            return candidate
    return None


def _parse_mapping(data: dict[str, Any], path: Path) -> ProjectDefaults:
    unknown = sorted(str(k) for k in data if k not in _KNOWN_KEYS)
    if unknown:
        raise ConfigurationError(f"{path.name}: unknown setting(s): {', '.join(unknown)}")

    values: dict[str, Any] = {}
    for key, choices in _CHOICES.items():
        raw = data.get(key)
        if raw is None:
            continue
        value = str(raw).strip()
        if value not in choices:
            raise ConfigurationError(
                f"{path.name}: invalid {key} {value!r} (choose from {', '.join(choices)})"
            )
        values[key] = value

    emoji = data.get("include_emoji")
    if emoji is not None:
        if not isinstance(emoji, bool):
            raise ConfigurationError(f"{path.name}: `include_emoji` must be true or false")
        values["include_emoji"] = emoji

    output = data.get("output")
    if output is not None:
        if not isinstance(output, str) or not output.strip():
            raise ConfigurationError(f"{path.name}: `output` must be a non-empty string")
        values["output"] = output.strip()

    return ProjectDefaults(source=path, **values)


def load_project_defaults(cwd: str | Path) -> ProjectDefaults:
    """
    Return defaults from `.readmeforge.yml` in cwd, or empty defaults if there is none.
    """
    path = find_config_file(cwd)
    if path is None:
        return ProjectDefaults()

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"{path.name}: could not read file: {e}") from e

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"{path.name}: invalid YAML: {e}") from e

    if data is None:
        return ProjectDefaults(source=path)
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path.name} must be a mapping/object at the top level.")
    return _parse_mapping(data, path)
