import os
from pathlib import Path

from .loader import as_bool

_DEFAULT_PROMPTS_DIR = Path.cwd() / "prompts"


class Prompt:
    def __init__(self, config: dict | None = None) -> None:
        prompt_cfg = (config or {}).get("aceprime", {}).get("prompts", {})
        self.PROMPTS_DIR: str = str(prompt_cfg.get("directory", os.getenv("PROMPTS_DIR", str(_DEFAULT_PROMPTS_DIR))))
        self.HOT_RELOAD: bool = as_bool(prompt_cfg.get("hot_reload", os.getenv("PROMPT_HOT_RELOAD", "0")))
        self.MIN_LENGTH: int = int(prompt_cfg.get("min_length", os.getenv("PROMPT_MIN_LENGTH", "10")))
        self.MAX_LENGTH: int = int(prompt_cfg.get("max_length", os.getenv("PROMPT_MAX_LENGTH", "10000")))
