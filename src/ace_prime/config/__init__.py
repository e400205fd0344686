"""Application configuration"""

import logging
from dotenv import load_dotenv

from .loader import load_raw_config
from .core import Core
from .prompt import Prompt
from .pipeline import PipelineSettings
from .local_llm import LocalLLM

load_dotenv()

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logging.basicConfig(format=LOG_FORMAT, datefmt=DATE_FORMAT, level=logging.INFO)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("discord").setLevel(logging.WARNING)

_RAW_CONFIG = load_raw_config()

core = Core(_RAW_CONFIG)
prompt = Prompt(_RAW_CONFIG)
pipeline = PipelineSettings(_RAW_CONFIG)
local_llm = LocalLLM(_RAW_CONFIG)


class Config:
    core = core
    prompt = prompt
    pipeline = pipeline
    local_llm = local_llm


__all__ = ["core", "prompt", "pipeline", "local_llm", "Config"]
