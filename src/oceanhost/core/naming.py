"""App Platform component and app naming rules."""

from __future__ import annotations

import re

MAX_NAME_LENGTH = 32
MIN_NAME_LENGTH = 2
SHORT_NAME_PREFIX = "app-"

_INVALID_CHARS = re.compile(r"[^a-z0-9-]")


def sanitize_name(name: str) -> str:
    """
    Sanitize a resource or app name for App Platform.

    App Platform names are lowercase alphanumerics and hyphens, 2-32
    characters, starting and ending with an alphanumeric.

    Examples:
        My.App.Name -> my-app-name
        my_app -> my-app
        a -> app-a
        _ -> app
    """
    sanitized = name.lower().replace("_", "-").replace(".", "-")
    sanitized = _INVALID_CHARS.sub("", sanitized)
    sanitized = sanitized.strip("-")

    # Filter first so the cut point isn't biased by dropped characters
    if len(sanitized) > MAX_NAME_LENGTH:
        sanitized = sanitized[:MAX_NAME_LENGTH].rstrip("-")

    if len(sanitized) < MIN_NAME_LENGTH:
        sanitized = f"{SHORT_NAME_PREFIX}{sanitized}".rstrip("-")

    return sanitized
