"""Redirect document rendering.

Produces the static HTML page that forwards a browser to the target path
using meta refresh, an inline script, and a fallback link.
"""

import html
import json

from linkbridge.core.url_path import CanonicalPath

DEFAULT_LANG = "en-US"
DEFAULT_TITLE = "Page Redirection"

_TEMPLATE = """<!DOCTYPE HTML>
<html lang="{lang}">

<head>
    <meta charset="UTF-8">
    <meta http-equiv="refresh" content="0; url={attr_target}">
    <script type="text/javascript">
        window.location.href = {script_target};
    </script>
    <title>{title}</title>
</head>

<body>
    <!-- Note: don't tell people to `click` the link, just tell them that it is a link. -->
    If you are not redirected automatically, follow this <a href='{attr_target}'>link to {attr_target}</a>.
</body>

</html>
"""


def _script_literal(target: str) -> str:
    # "</" would close the script element early
    return json.dumps(target, ensure_ascii=False).replace("<", "\\u003c")


def render(
    path: CanonicalPath,
    *,
    lang: str = DEFAULT_LANG,
    title: str = DEFAULT_TITLE,
) -> str:
    """Render the redirect document for a canonical path.

    The same destination is used by all three redirect mechanisms. Paths
    without markup-significant characters appear byte-identical in each.

    Args:
        path: Canonical target path
        lang: Value of the html lang attribute
        title: Page title

    Returns:
        Complete HTML5 document
    """
    target = str(path)
    return _TEMPLATE.format(
        lang=html.escape(lang),
        title=html.escape(title),
        attr_target=html.escape(target, quote=True),
        script_target=_script_literal(target),
    )
