"""
Template Registry

Loads message templates from templates/messages.yaml (once, cached) and
interpolates {{variable}} placeholders.
"""

import logging
import re
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

FALLBACK_LANGUAGE = "ru"

_TEMPLATE_FILE = Path(__file__).resolve().parent / "templates" / "messages.yaml"
_PLACEHOLDER = re.compile(r"\{\{(\w+)\}\}")

# Cache for loaded templates
_TEMPLATES_CACHE: Optional[Dict[str, Any]] = None


def load_templates() -> Dict[str, Any]:
    """
    Load the template registry (cached).

    Raises:
        FileNotFoundError: If messages.yaml is missing from the package
    """
    global _TEMPLATES_CACHE

    if _TEMPLATES_CACHE is not None:
        return _TEMPLATES_CACHE

    if not _TEMPLATE_FILE.exists():
        raise FileNotFoundError(
            f"messages.yaml not found at {_TEMPLATE_FILE}. "
            "It must ship as package data."
        )

    with _TEMPLATE_FILE.open(encoding="utf-8") as f:
        _TEMPLATES_CACHE = yaml.safe_load(f) or {}

    logger.debug(f"Loaded message templates from {_TEMPLATE_FILE}")
    return _TEMPLATES_CACHE


def interpolate(template: str, data: Dict[str, Any]) -> str:
    """
    Interpolate variables in a template string.

    Supports {{variable}} syntax. Placeholders without a value are left as-is.
    """
    def _replace(match: "re.Match") -> str:
        key = match.group(1)
        return str(data[key]) if key in data else match.group(0)

    # Single pass: substituted values are never re-scanned for placeholders
    return _PLACEHOLDER.sub(_replace, template)


def supported_languages() -> Dict[str, Dict[str, str]]:
    """Language code -> {flag, label}, in display order."""
    return load_templates().get("languages", {})


def is_supported_language(language: Optional[str]) -> bool:
    return bool(language) and language in supported_languages()


def operator_templates() -> Dict[str, Any]:
    return load_templates()["operator"]


def customer_templates(language: str) -> Dict[str, Any]:
    """Customer copy for a language, falling back to the default language."""
    section = load_templates()["customer"]
    return section.get(language) or section[FALLBACK_LANGUAGE]


def bot_templates(language: str) -> Dict[str, Any]:
    """Conversation copy (welcome, buttons, prompts) for a language."""
    section = load_templates()["bot"]
    return section.get(language) or section[FALLBACK_LANGUAGE]


def bot_text(key: str) -> str:
    """Language-independent bot copy (e.g. configuration warnings)."""
    return load_templates()["bot"][key]
