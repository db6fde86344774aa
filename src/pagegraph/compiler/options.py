"""Compilation options."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath

DEFAULT_HTML_PATH = "public/index.html"
DEFAULT_CSS_PATH = "public/style.css"
DEFAULT_JS_PATH = "public/script.js"


@dataclass(frozen=True)
class CompileOptions:
    """Target file paths named in the assembled document.

    Attributes:
        html_path: Path of the HTML file the document describes
        css_path: Path of the stylesheet
        js_path: Path of the script
    """

    html_path: str = DEFAULT_HTML_PATH
    css_path: str = DEFAULT_CSS_PATH
    js_path: str = DEFAULT_JS_PATH

    @property
    def css_link(self) -> str:
        """Stylesheet reference relative to the HTML file, e.g. './style.css'."""
        return f"./{PurePosixPath(self.css_path).name}"

    @property
    def js_link(self) -> str:
        """Script reference relative to the HTML file, e.g. './script.js'."""
        return f"./{PurePosixPath(self.js_path).name}"
