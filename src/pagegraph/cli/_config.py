"""Project-level configuration from pyproject.toml.

Reads the [tool.pagegraph] section to provide named graph shortcuts and the
target file paths written into compiled documents.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path

from pagegraph.compiler.options import (
    DEFAULT_CSS_PATH,
    DEFAULT_HTML_PATH,
    DEFAULT_JS_PATH,
    CompileOptions,
)


@dataclass(frozen=True)
class PagegraphConfig:
    """Configuration from [tool.pagegraph] in pyproject.toml.

    Attributes:
        graphs: Registered graph names mapped to JSON file paths
        html_path: Target HTML path named in compiled documents
        css_path: Target stylesheet path
        js_path: Target script path
        root: Directory holding the pyproject.toml (None when not found)
    """

    graphs: dict[str, str] = field(default_factory=dict)
    html_path: str = DEFAULT_HTML_PATH
    css_path: str = DEFAULT_CSS_PATH
    js_path: str = DEFAULT_JS_PATH
    root: Path | None = None

    def to_options(self) -> CompileOptions:
        return CompileOptions(html_path=self.html_path, css_path=self.css_path, js_path=self.js_path)

    def graph_path(self, name: str) -> Path | None:
        """File path registered for ``name``, resolved against the project root."""
        registered = self.graphs.get(name)
        if registered is None:
            return None
        path = Path(registered)
        if not path.is_absolute() and self.root is not None:
            path = self.root / path
        return path


def find_pyproject(start: Path | None = None) -> Path | None:
    """Walk up from start directory to find pyproject.toml."""
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate
    return None


def load_config(start: Path | None = None) -> PagegraphConfig:
    """Load [tool.pagegraph] from the nearest pyproject.toml.

    Returns default config if no pyproject.toml or no [tool.pagegraph] section.
    """
    path = find_pyproject(start)
    if path is None:
        return PagegraphConfig()

    if sys.version_info >= (3, 11):
        import tomllib
    else:
        import tomli as tomllib

    with open(path, "rb") as f:
        data = tomllib.load(f)

    section = data.get("tool", {}).get("pagegraph", {})
    if not section:
        return PagegraphConfig(root=path.parent)

    return PagegraphConfig(
        graphs=section.get("graphs", {}),
        html_path=section.get("html_path", DEFAULT_HTML_PATH),
        css_path=section.get("css_path", DEFAULT_CSS_PATH),
        js_path=section.get("js_path", DEFAULT_JS_PATH),
        root=path.parent,
    )
