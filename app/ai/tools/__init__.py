"""
Educational tools - prompt enhancement, HTML tool generation and image analysis.

The service itself lives in app.ai.tools.service; this package root only
exposes the lightweight contracts and HTML helpers.
"""

from app.ai.tools.contracts import FileAttachment, GeneratedTool
from app.ai.tools.html import ensure_html, looks_like_html, strip_code_fences

__all__ = [
    "FileAttachment",
    "GeneratedTool",
    "ensure_html",
    "looks_like_html",
    "strip_code_fences",
]
