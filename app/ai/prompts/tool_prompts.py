"""
Educational Tool Prompts - templates for prompt enhancement, HTML tool
generation and image analysis.

Usage:
======
    from app.ai.prompts.tool_prompts import (
        build_enhance_prompt,
        build_tool_system_prompt,
        build_file_context,
    )

    system_prompt = build_tool_system_prompt("Photosynthesis", tool_type="quiz", category="Biology")
"""

from typing import Iterable, Optional

from app.ai.tools.contracts import FileAttachment


# ---------------------------------------------------------------------------
# TOOL TYPES
# ---------------------------------------------------------------------------
# Built-in tool types. Anything else the user sends (their own custom tool
# type labels) is treated as a free-form request.

AUTO_TOOL_TYPE = "auto"
NO_CATEGORY = "none"

TOOL_TYPE_INSTRUCTIONS = {
    "quiz": "Create an interactive quiz with multiple choice questions, immediate feedback, and a score counter.",
    "flashcards": "Create interactive digital flashcards that users can flip through with click/tap interactions.",
    "chart": "Create an interactive chart or graph with detailed data visualization.",
    "worksheet": "Create an interactive worksheet with fillable fields and exercises.",
    "timeline": "Create an interactive timeline with detailed clickable events and detailed information.",
    "game": "Create an educational game with interactive elements and scoring.",
    "lecture": (
        "Create an interactive slideshow relating to the subject. Allow the user to move "
        "between slides, and include detailed information in each slide."
    ),
    "diagram": "Create an interactive diagram or infographic with detailed and clickable elements.",
    "custom": (
        "Create a highly customized, advanced educational tool with unique interactive features "
        "tailored specifically to the user's request. Use creative and innovative approaches that "
        "go beyond standard tool types."
    ),
}

CUSTOM_TOOL_TYPE_TEMPLATE = (
    "Specifically create: {tool_type}. Create a highly customized, advanced educational tool "
    "with unique interactive features tailored specifically to this tool type and the user's "
    "request. Use creative and innovative approaches."
)

AUTO_TOOL_TYPE_INSTRUCTION = "Choose the most appropriate tool type for this request and create it."


# ---------------------------------------------------------------------------
# PROMPT ENHANCEMENT
# ---------------------------------------------------------------------------

ENHANCE_PROMPT_TEMPLATE = """
You are an educational tool prompt enhancer. Your job is to take a basic prompt and enhance it to create better, more detailed educational tools.

Take this prompt: "{prompt}"
{category_line}

Note: The prompt is from the App User. If the prompt doesn't make sense, or is too vague, you can make a reasonable assumption about what the user wants.

Enhance it by:
1. Adding specific learning objectives
2. Suggesting appropriate difficulty levels
3. Including interactive elements
4. Making it more engaging and educational
5. Adding context or real-world applications
6. Specifying the target audience if not clear
7. Making prompt more clear and concise
8. Make it less than 500 characters long

Return ONLY the enhanced prompt, nothing else. Keep it concise but much more detailed and educational than the original.
"""


# ---------------------------------------------------------------------------
# HTML TOOL GENERATION
# ---------------------------------------------------------------------------

TOOL_SYSTEM_PROMPT_TEMPLATE = """You are an expert educational app creator. Generate complete, interactive HTML content for educational/study tools.

IMPORTANT REQUIREMENTS:
1. Generate ONLY valid HTML content that can be embedded in an iframe
2. Include all necessary CSS styles inline within <style> tags
3. Include all necessary JavaScript within <script> tags
4. Make the content fully self-contained and interactive
5. Use modern, responsive design with good UX
6. Ensure accessibility with proper ARIA labels and semantic HTML
7. Use vibrant colors and engaging visual elements
8. Make sure all functionality works without external dependencies
9. Create modern and appealing UI
10. Make sure the app is COMPLETE. DO NOT ADD ANY "PLACEHOLDERS"
11. The result will be used for commercial use.
12. Do your best, we want quality.
13. Try your best to fill in stuff such as APIs.
14. There should be no placeholders.

The user wants: {prompt}
{tool_type_instruction}
{category_line}{file_context}

Generate complete HTML that will work immediately when loaded in an iframe."""


# ---------------------------------------------------------------------------
# IMAGE ANALYSIS
# ---------------------------------------------------------------------------

IMAGE_ANALYSIS_PROMPT = (
    "Analyze this image in detail and describe its key elements, context, subject matter, "
    "and any text visible in the image. Focus on educational content that could be used to "
    "create learning tools."
)


# ---------------------------------------------------------------------------
# BUILDERS
# ---------------------------------------------------------------------------

def build_category_line(category: Optional[str]) -> str:
    """'Category/Subject: X', or '' when no category (or "none") was chosen."""
    if category and category != NO_CATEGORY:
        return f"Category/Subject: {category}"
    return ""


def build_tool_type_instruction(tool_type: Optional[str]) -> str:
    """
    Instruction line for the requested tool type.

    - None / "auto": let the model pick
    - built-in type: the mapped instruction
    - anything else: a user's custom tool type label
    """
    if not tool_type or tool_type == AUTO_TOOL_TYPE:
        return AUTO_TOOL_TYPE_INSTRUCTION

    instruction = TOOL_TYPE_INSTRUCTIONS.get(tool_type)
    if instruction:
        return f"Specifically create: {instruction}"

    return CUSTOM_TOOL_TYPE_TEMPLATE.format(tool_type=tool_type)


def build_file_context(files: Optional[Iterable[FileAttachment]]) -> str:
    """
    Describe user-supplied files so the model can use them.

    Image attachments are expected to arrive already converted to text
    (see EducationalToolService.analyze_image). Returns "" with no files.
    """
    files = list(files or [])
    if not files:
        return ""

    parts = ["\n\nThe user has also provided the following files for context:\n"]
    for index, attachment in enumerate(files, start=1):
        parts.append(f"\nFile {index} ({attachment.file_name}):\n{attachment.content}\n")
    parts.append(
        "\nUse this file content to create more relevant and personalized educational tools. "
        "Incorporate the information from these files into the educational tool you create."
    )
    return "".join(parts)


def build_enhance_prompt(prompt: str, category: Optional[str] = None) -> str:
    return ENHANCE_PROMPT_TEMPLATE.format(
        prompt=prompt,
        category_line=build_category_line(category),
    )


def build_tool_system_prompt(
    prompt: str,
    tool_type: Optional[str] = None,
    category: Optional[str] = None,
    file_context: str = "",
) -> str:
    """
    Build the system instruction for HTML tool generation.

    Args:
        prompt: What the user asked for
        tool_type: Built-in type, custom label, "auto" or None
        category: Subject, "none" or None
        file_context: Output of build_file_context()
    """
    return TOOL_SYSTEM_PROMPT_TEMPLATE.format(
        prompt=prompt,
        tool_type_instruction=build_tool_type_instruction(tool_type),
        category_line=build_category_line(category),
        file_context=file_context,
    )
