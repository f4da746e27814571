"""Shield template syntax from external HTML transforms.

Host bundlers and HTML minifiers may rewrite or drop ``{{ ... }}`` and
``{% ... %}`` tokens they do not understand. :func:`protect` hides each
token inside an HTML comment carrying its base64 encoding; :func:`restore`
turns the comments back into the original tokens::

    protect('<p>{{ title }}</p>')  -> '<p><!--template:...--></p>'
    restore(protect(text)) == text
"""

import base64
import binascii
import re

TEMPLATE_SYNTAX_RE = re.compile(r"(\{[{%][^{}%]*[%}]\})")
PROTECTED_RE = re.compile(r"<!--template:([A-Za-z0-9+/=]+)-->")


def protect(html: str) -> str:
    """Encode every template token in *html* as an HTML comment."""
    return TEMPLATE_SYNTAX_RE.sub(
        lambda m: f"<!--template:{base64.b64encode(m.group(1).encode()).decode('ascii')}-->",
        html,
    )


def restore(html: str) -> str:
    """Decode comments written by :func:`protect` back into template tokens.

    Comments that do not hold valid base64 UTF-8 are left as they are.
    """

    def _decode(match: re.Match[str]) -> str:
        try:
            return base64.b64decode(match.group(1), validate=True).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError):
            return match.group(0)

    return PROTECTED_RE.sub(_decode, html)
