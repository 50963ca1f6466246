"""Markdown rendering for index pages."""

from mavenindex.render.markdown import (
    breadcrumb,
    format_date,
    format_size,
    render_index,
    url_path,
)

__all__ = ["breadcrumb", "format_date", "format_size", "render_index", "url_path"]
