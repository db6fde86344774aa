"""Compiler package - graph to HTML, CSS and JavaScript text."""

from pagegraph.compiler.css import render_css
from pagegraph.compiler.diagnostics import Diagnostic, DiagnosticKind, Diagnostics
from pagegraph.compiler.document import assemble_document, compile_graph, wrap_js
from pagegraph.compiler.html import render_html, render_tree
from pagegraph.compiler.js import render_js
from pagegraph.compiler.options import CompileOptions
from pagegraph.compiler.roots import NO_ROOT_MESSAGE, find_roots

__all__ = [
    "CompileOptions",
    "Diagnostic",
    "DiagnosticKind",
    "Diagnostics",
    "NO_ROOT_MESSAGE",
    "assemble_document",
    "compile_graph",
    "find_roots",
    "render_css",
    "render_html",
    "render_js",
    "render_tree",
    "wrap_js",
]
