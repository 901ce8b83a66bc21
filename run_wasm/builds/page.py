"""Host page generation.

The page is produced by literal replacement of two markers, `{{name}}` and
`{{css}}`, in an HTML template. Replacing `{{name}}` first is safe because a
crate or target name cannot contain `{`.
"""

from __future__ import annotations

import logging
from pathlib import Path

from run_wasm.errors import TemplateError

logger = logging.getLogger(__name__)

NAME_MARKER = "{{name}}"
CSS_MARKER = "{{css}}"
INDEX_FILENAME = "index.html"

DEFAULT_TEMPLATE = """\
<!DOCTYPE html>
<html>
  <head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <title>{{name}}</title>
    <style type="text/css">{{css}}</style>
  </head>
  <body>
    <script type="module">
      import init from "./{{name}}.js";
      init();
    </script>
  </body>
</html>
"""


def validate_css(css: str) -> None:
    """Reject css that could close the style element.

    Only the exact `</style>` sequence is caught; this guards against
    accidents, not against a determined author.

    Raises:
        TemplateError: If css contains `</style>`.
    """
    if "</style>" in css:
        raise TemplateError(
            "`</style>` detected in the css. This is disallowed to prevent "
            "injecting elements into the DOM."
        )


def load_template(path: Path) -> str:
    """Read a custom page template.

    Raises:
        TemplateError: If the file cannot be read or is not UTF-8.
    """
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise TemplateError(f"Cannot read page template {path}: {e}") from e


class PageTemplate:
    """A validated host page template.

    Args:
        css: Stylesheet text placed in the page's style element.
        template: Custom HTML template, or None for DEFAULT_TEMPLATE.

    Raises:
        TemplateError: If the css is disallowed or the template lacks a
            marker it needs.
    """

    def __init__(self, css: str = "", template: str | None = None) -> None:
        validate_css(css)
        if template is None:
            template = DEFAULT_TEMPLATE
        else:
            if NAME_MARKER not in template:
                raise TemplateError(
                    f"Page template is missing the {NAME_MARKER} marker"
                )
            if css and CSS_MARKER not in template:
                raise TemplateError(
                    f"css was supplied but the page template has no {CSS_MARKER} marker"
                )
        self.css = css
        self.template = template

    def render(self, name: str) -> str:
        """Render the page for a target name."""
        return self.template.replace(NAME_MARKER, name).replace(CSS_MARKER, self.css)

    def write(self, dest_dir: Path, name: str) -> Path:
        """Render the page and write it as index.html in dest_dir.

        Returns:
            Path of the written file.
        """
        index_path = dest_dir / INDEX_FILENAME
        index_path.write_text(self.render(name), encoding="utf-8")
        logger.debug("Wrote %s", index_path)
        return index_path


__all__ = [
    "CSS_MARKER",
    "DEFAULT_TEMPLATE",
    "INDEX_FILENAME",
    "NAME_MARKER",
    "PageTemplate",
    "load_template",
    "validate_css",
]
