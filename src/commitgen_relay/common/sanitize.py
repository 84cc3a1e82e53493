"""Post-processing of model output into a plain-text commit message."""
from __future__ import annotations
import re

# Opening fence with an optional language tag on its own line, e.g. "```text\n".
_FENCE_OPEN = re.compile(r"```[^\S\n]*[A-Za-z0-9.+#-]*[^\S\n]*\n")
_FENCE = re.compile(r"```")
_BACKTICK = re.compile(r"`")
_BOLD = re.compile(r"\*{2,}")

def sanitize_message(text: str) -> str:
    """
    Strip markdown fences and stray formatting markers from generated text.

    Args:
        text: Raw model output.

    Returns:
        Trimmed text with no backticks and no bold markers. Applying this
        function to its own output returns the same string.
    """
    out = _FENCE_OPEN.sub("", text)
    out = _FENCE.sub("", out)
    out = _BACKTICK.sub("", out)
    out = _BOLD.sub("", out)
    return out.strip()
