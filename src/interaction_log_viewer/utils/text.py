"""Clean and shorten message text for display."""

import re

# Harness markup that is never part of what the user typed
_INTERNAL_TAG_RE = re.compile(
    r'<(system-reminder|local-command-caveat|command-name|command-message|'
    r'command-args|local-command-stdout)\b[^>]*>.*?</\1>',
    re.DOTALL,
)

ELLIPSIS = "..."


def sanitize_text(text: str) -> str:
    """Remove internal markup tags and collapse the blank lines they leave."""
    if not text:
        return ""
    result = _INTERNAL_TAG_RE.sub("", text)
    result = re.sub(r'\n{3,}', '\n\n', result)
    return result.strip()


def truncate(text: str | None, max_length: int) -> str:
    """Cut text to max_length characters, appending an ellipsis when cut."""
    if not text:
        return ""
    if len(text) <= max_length:
        return text
    return text[:max_length] + ELLIPSIS
