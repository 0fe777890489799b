"""Prompt assembly for the speech model."""

import re

PROMPT_TEMPLATE = """INSTRUCTIONS FOR HOW TO SPEAK:
1. Accent: {accent}
2. Expression Style: {expression}

TEXT TO SPEAK (say this exactly as written):
{text}"""


def replace_model_name(text: str, voice: str, placeholder: str) -> str:
    """Replace every literal occurrence of ``placeholder`` with the voice name."""
    if not placeholder:
        return text
    return re.sub(re.escape(placeholder), lambda _: voice, text)


def clean_accent_instruction(instruction: str) -> str:
    # The template supplies its own separator after "Accent".
    cleaned = instruction.strip()
    if cleaned.endswith(":"):
        cleaned = cleaned[:-1].strip()
    return cleaned


def build_prompt(accent_instruction: str, expression_instruction: str, text: str) -> str:
    """Build the structured prompt sent to the speech model.

    Instructions and the text to read aloud are kept in separate, labelled
    sections so the model does not speak the instructions.
    """
    return PROMPT_TEMPLATE.format(
        accent=clean_accent_instruction(accent_instruction),
        expression=expression_instruction,
        text=text,
    )
