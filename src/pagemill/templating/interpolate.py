"""Variable interpolation — substitute ``{{ name }}`` tokens.

Names are trimmed of surrounding whitespace. Dotted names walk nested
mappings (``{{ site.title }}``). A name with no value is left verbatim,
so a later stage (or a downstream templating layer) can still fill it.

No escaping happens by default. Values are inserted as ``str(value)``.
With ``autoescape=True`` values are HTML-escaped unless they are already
marked safe with kida's ``Markup``.
"""

import html
import re
from collections.abc import Mapping
from typing import Any

from kida.template import Markup

VARIABLE_RE = re.compile(r"\{\{(.*?)\}\}", re.DOTALL)

_MISSING = object()


def lookup_variable(variables: Mapping[str, Any], name: str) -> Any:
    """Resolve *name* in *variables*, walking dotted paths.

    An exact key match wins over a dotted walk, so flat maps may use
    dotted keys. Returns a private sentinel when nothing matches.
    """
    if name in variables:
        return variables[name]
    value: Any = variables
    for segment in name.split("."):
        if not isinstance(value, Mapping) or segment not in value:
            return _MISSING
        value = value[segment]
    return value


def interpolate(content: str, variables: Mapping[str, Any], *, autoescape: bool = False) -> str:
    """Replace every ``{{ name }}`` in *content* that *variables* defines."""

    def _replace(match: re.Match[str]) -> str:
        name = match.group(1).strip()
        if not name:
            return match.group(0)
        value = lookup_variable(variables, name)
        if value is _MISSING or value is None:
            return match.group(0)
        if autoescape and not isinstance(value, Markup):
            return html.escape(str(value))
        return str(value)

    return VARIABLE_RE.sub(_replace, content)
