"""
usage.py

Responsibility: Render the help screen.

The text is a Jinja2 template so the option table is filled from the same choice
constants the parser validates against. Output contains rich markup tags and is
meant for `Console.markup`.
"""

from __future__ import annotations

from jinja2 import Environment, StrictUndefined

from readmeforge import __version__
from readmeforge.options import (
    API_KEY_ENV,
    DEFAULT_LANGUAGE,
    DEFAULT_OUTPUT,
    DEFAULT_TEMPLATE,
    DEFAULT_TONE,
    LANGUAGES,
    PROG,
    TEMPLATES,
    TONES,
)

SETTINGS_URL = "https://readmeforge.app/settings"

USAGE_TEMPLATE = """
[bold]{{ prog }}[/bold] {{ version }} - Generate professional README files with AI

[bold]Usage:[/bold]
  {{ prog }} <options>

[bold]Options:[/bold]
  -k, --key <key>       API key (or set {{ api_key_env }} env var)
  -r, --repo <url>      GitHub repo URL (auto-detected from git remote)
  -t, --template <type> Template: {{ templates | join(", ") }} (default: {{ default_template }})
  -l, --language <lang> Output language: {{ languages | join(", ") }} (default: {{ default_language }})
  --tone <tone>         Tone: {{ tones | join(", ") }} (default: {{ default_tone }})
  --no-emoji            Disable emojis in headings
  -o, --output <file>   Output file (default: {{ default_output }})
  -f, --force           Overwrite existing README without prompting
  --verbose             Log debug details to stderr
  -h, --help            Show this help
  -v, --version         Show version

[bold]Project defaults:[/bold]
  Template, language, tone, include_emoji and output can be set in
  .readmeforge.yml in the current directory. Flags take precedence.

[bold]Examples:[/bold]
  [dim]# Generate README for current repo[/dim]
  {{ prog }} -k rf_xxxxx

  [dim]# Generate minimal README in Russian[/dim]
  {{ prog }} -k rf_xxxxx -t minimal -l ru

  [dim]# Use env var for API key[/dim]
  {{ api_key_env }}=rf_xxxxx {{ prog }}

[bold]Get your API key:[/bold]
  {{ settings_url }}
"""


def render_usage() -> str:
    env = Environment(
        autoescape=False,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )
    template = env.from_string(USAGE_TEMPLATE)
    return template.render(
        prog=PROG,
        version=__version__,
        api_key_env=API_KEY_ENV,
        templates=TEMPLATES,
        languages=LANGUAGES,
        tones=TONES,
        default_template=DEFAULT_TEMPLATE,
        default_language=DEFAULT_LANGUAGE,
        default_tone=DEFAULT_TONE,
        default_output=DEFAULT_OUTPUT,
        settings_url=SETTINGS_URL,
    )
