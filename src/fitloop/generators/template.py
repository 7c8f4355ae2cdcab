"""Minimal placeholder templating for prompt text.

Supports two constructs:

    {{key}}                 replaced with data[key]
    {{#key}} ... {{/key}}   repeated once per mapping in data[key]

Placeholders whose key is not supplied are left untouched, so a template
can be rendered in several passes as data becomes available. There are no
conditionals and no escaping; output is plain text.
"""

import re
from collections import ChainMap
from collections.abc import Mapping, Sequence
from typing import Any

# A block or a scalar placeholder, matched in a single left-to-right scan
_TOKEN_PATTERN = re.compile(
    r"{{#(?P<block>\w+)}}(?P<body>.*?){{/(?P=block)}}|{{(?P<key>\w+)}}",
    re.DOTALL,
)
_PLACEHOLDER_PATTERN = re.compile(r"{{(\w+)}}")


def format_value(value: Any) -> str:
    """Convert a data value to the text inserted into a template."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ", ".join(format_value(v) for v in value)
    return str(value)


def _is_item_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _substitute(fragment: str, scope: Mapping[str, Any]) -> str:
    def replace(match: re.Match) -> str:
        key = match.group(1)
        if key not in scope:
            return match.group(0)
        return format_value(scope[key])

    return _PLACEHOLDER_PATTERN.sub(replace, fragment)


def _expand_block(body: str, items: Any, outer: Mapping[str, Any]) -> str:
    if not _is_item_sequence(items):
        return ""

    rendered = []
    for item in items:
        if isinstance(item, Mapping):
            # Item fields shadow the outer scope
            rendered.append(_substitute(body, ChainMap(dict(item), outer)))
        else:
            rendered.append(_substitute(body, outer))
    return "\n".join(rendered)


def render(template: str, data: Mapping[str, Any]) -> str:
    """Render a template against a mapping of values.

    Args:
        template: Template text containing {{key}} and {{#key}}...{{/key}}
        data: Values to substitute

    Returns:
        Rendered text. Missing blocks and non-sequence block values render
        as empty strings; missing scalar keys are left verbatim.
    """

    def replace(match: re.Match) -> str:
        block = match.group("block")
        if block is not None:
            return _expand_block(match.group("body"), data.get(block), data)

        key = match.group("key")
        if key not in data:
            return match.group(0)
        return format_value(data[key])

    return _TOKEN_PATTERN.sub(replace, template)


def find_placeholders(template: str) -> set[str]:
    """Return the scalar placeholder names still present in a template."""
    return set(_PLACEHOLDER_PATTERN.findall(template))
