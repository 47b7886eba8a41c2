"""
Contracts for the educational tool service.
"""

from dataclasses import dataclass
from typing import Literal


AttachmentType = Literal["text", "image"]


@dataclass
class FileAttachment:
    """A user-supplied file, already reduced to text."""

    type: AttachmentType
    content: str
    file_name: str


@dataclass
class GeneratedTool:
    """Result of HTML tool generation."""

    html: str
    """Cleaned HTML, safe to load into an iframe's srcdoc."""

    tool_description: str = ""
    """Short description of the tool (currently always empty)."""
