import logging
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from src.rules.models import Rules

logger = logging.getLogger(__name__)

_FENCED_YAML = re.compile(r"^```ya?ml\s*$(.*?)^```\s*$", re.MULTILINE | re.DOTALL)


def _extract_yaml(content: str) -> str:
    """The first fenced yaml block of a markdown doc, or the whole text."""
    match = _FENCED_YAML.search(content)
    return match.group(1) if match else content


def load_rules(path: Path | str) -> Rules:
    """
    Load and validate the store rules file.

    The file is plain YAML, or markdown with the rules in a fenced yaml block.

    Raises:
        FileNotFoundError: the file does not exist.
        ValueError: the YAML cannot be parsed or does not match the schema.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Rules file not found at: {path}")

    try:
        data = yaml.safe_load(_extract_yaml(path.read_text()))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML syntax in rules file: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Rules file must contain a mapping, got {type(data).__name__}")

    try:
        rules = Rules.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Rules validation failed:\n{e}") from e

    logger.debug("Loaded rules %s v%s", rules.project.slug, rules.project.rules_version)
    return rules
