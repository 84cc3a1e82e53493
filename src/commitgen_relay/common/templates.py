"""Prompt templating helpers."""
from __future__ import annotations
from pathlib import Path

DEFAULT_TEMPLATE_PATH = Path(__file__).with_name("prompt_template.txt")
PLACEHOLDER = "{{diff}}"

def load_template(path: str | Path | None = None) -> str:
    """
    Load a prompt template file.

    Args:
        path: Path to template. Defaults to the packaged template.
    """
    return Path(path or DEFAULT_TEMPLATE_PATH).read_text(encoding="utf-8")

def render_prompt(template: str, diff: str) -> str:
    """
    Render a diff into the template.

    Args:
        template: Template content containing {{diff}}.
        diff: Staged diff, embedded verbatim.

    Returns:
        Rendered prompt. Templates without the placeholder get the diff
        appended after a blank line.
    """
    if PLACEHOLDER not in template:
        return f"{template.rstrip()}\n\n{diff}"
    return template.replace(PLACEHOLDER, diff)
