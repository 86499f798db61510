from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Tuple

from dotenv import load_dotenv

load_dotenv()

ROOT = Path(__file__).resolve().parent

DEFAULT_VERSION = "v1"


@lru_cache
def load(namespace: str, name: str) -> str:
    """Load a prompt file from the prompts directory.

    Args:
        namespace: Subdirectory name (e.g., 'card_extraction')
        name: File name (e.g., 'system_v1.md')

    Returns:
        Prompt text as string

    Raises:
        FileNotFoundError: If prompt file doesn't exist
    """
    p = ROOT / namespace / name
    if not p.exists():
        raise FileNotFoundError(f"Prompt not found: {p}")
    return p.read_text(encoding="utf-8").strip()


def get_card_extraction_prompts(version: str | None = None) -> Tuple[str, str]:
    """Get the card extraction system instruction and user prompt template.

    Args:
        version: Prompt version (defaults to PROMPTS_CARD_EXTRACTION_VERSION or "v1")

    Returns:
        Tuple of (system_prompt, user_prompt_template); the template has a ``{content}`` slot
    """
    if version is None:
        version = os.getenv("PROMPTS_CARD_EXTRACTION_VERSION", DEFAULT_VERSION)
    return load("card_extraction", f"system_{version}.md"), load("card_extraction", f"user_{version}.md")


def build_card_prompt(content: str, version: str | None = None) -> str:
    """Embed extracted page text in the card extraction prompt."""
    _, template = get_card_extraction_prompts(version)
    # str.replace keeps braces inside the page text intact
    return template.replace("{content}", content)


def card_system_instruction(version: str | None = None) -> str:
    system, _ = get_card_extraction_prompts(version)
    return system
