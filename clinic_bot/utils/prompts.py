"""
Centralized prompt and response-copy loading with caching.
Loads prompts once from YAML and caches for performance.
"""

import yaml
from pathlib import Path
from functools import lru_cache

PROMPTS_PATH = Path(__file__).parent.parent / "prompts.yaml"


@lru_cache(maxsize=1)
def load_prompts() -> dict:
    """
    Loads prompts and fixed response texts from the packaged YAML file.
    Only loads once and reuses the result.

    Returns:
        Dictionary containing all prompt configurations

    Raises:
        FileNotFoundError: If prompts.yaml is not found
    """
    with open(PROMPTS_PATH, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)
