"""Parsing of editor hook payloads delivered on stdin."""

from __future__ import annotations

import json
from typing import Optional

from .models import HookEvent

EDIT_TOOLS = frozenset({"Edit", "Write", "MultiEdit"})


class HookInputError(ValueError):
    """Raised when a hook payload is not a JSON object."""


def parse_hook_payload(raw: str) -> Optional[HookEvent]:
    """Return the edit event described by ``raw``.

    Returns None for non-edit tools or payloads without a file path.
    """
    if not raw.strip():
        return None
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise HookInputError(f"Hook payload is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise HookInputError("Hook payload must be a JSON object")

    tool_name = data.get("tool_name")
    if not isinstance(tool_name, str) or tool_name not in EDIT_TOOLS:
        return None

    tool_input = data.get("tool_input")
    if not isinstance(tool_input, dict):
        return None
    file_path = tool_input.get("file_path")
    if not isinstance(file_path, str) or not file_path.strip():
        return None

    return HookEvent(tool_name=tool_name, file_path=file_path.strip())


__all__ = ["EDIT_TOOLS", "HookInputError", "parse_hook_payload"]
