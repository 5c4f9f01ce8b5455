"""
Flat `{key}` substitution against a FragmentStore.

`{{` and `}}` produce literal braces. Anything else that isn't a complete
`{key}` placeholder (including a lone brace) is copied through untouched.
"""
import re
from typing import List

from ..exceptions import UnresolvedPlaceholderError

_TOKEN_RE = re.compile(r'\{\{|\}\}|\{([^{}]+)\}')


def placeholders(template: str) -> List[str]:
    """Keys referenced by `template`, in order of appearance."""
    return [m.group(1) for m in _TOKEN_RE.finditer(template) if m.group(1) is not None]


def render(template: str, fragments) -> str:
    """
    Substitutes every placeholder in `template`.

    Raises UnresolvedPlaceholderError for the first key not in `fragments`;
    nothing is returned unless every placeholder resolves.
    """
    parts = []
    pos = 0
    for m in _TOKEN_RE.finditer(template):
        parts.append(template[pos:m.start()])
        token = m.group(0)
        key = m.group(1)

        if key is None:
            # Escaped brace
            parts.append(token[0])
        else:
            value = fragments.get(key)
            if value is None:
                raise UnresolvedPlaceholderError(key)
            parts.append(value)
        pos = m.end()

    parts.append(template[pos:])
    return "".join(parts)
