"""Model text formatting — normalize indentation and move conditions last.

The output has three sections in fixed order: the ``model`` / ``schema``
header, all ``type`` blocks, then all ``condition`` blocks.  Lines keep
their relative order inside each section.
"""

from __future__ import annotations

import logging


log = logging.getLogger(__name__)

_INDENT = "  "


def format_model(text: str) -> str:
    """Re-indent model text and collect condition blocks at the end."""
    sections: dict[str, list[str]] = {"model": [], "type": [], "condition": []}
    current = sections["model"]
    in_condition = False
    in_relations = False

    for line in text.split("\n"):
        trimmed = line.strip()

        if not trimmed:
            current.append("")
            if not in_condition:
                in_relations = False
            continue

        indent = ""
        if trimmed.startswith("model"):
            current = sections["model"]
            in_relations = False
        elif trimmed.startswith("schema "):
            indent = _INDENT
        elif trimmed.startswith("type "):
            current = sections["type"]
            in_relations = False
        elif trimmed.startswith("condition "):
            current = sections["condition"]
            in_condition = True
            in_relations = False
        elif trimmed.startswith("relations"):
            indent = _INDENT
            in_relations = True
        elif trimmed.startswith("define "):
            indent = _INDENT * 2
        elif trimmed == "}":
            in_condition = False
        elif in_condition:
            indent = _INDENT
        elif in_relations:
            indent = _INDENT * 2

        current.append(indent + trimmed)

    parts = ["\n".join(sections["model"]).strip()]
    for name in ("type", "condition"):
        if sections[name]:
            parts.append("\n".join(sections[name]).strip())

    log.info("Formatted model (%d type lines, %d condition lines)",
             len(sections["type"]), len(sections["condition"]))
    return "\n\n".join(parts) + "\n"
