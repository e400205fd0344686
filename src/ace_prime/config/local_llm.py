import os

from .loader import as_bool


class LocalLLM:
    """``[aceprime.local_llm]``: route generation to an Ollama server instead of OpenAI."""

    def __init__(self, config: dict | None = None) -> None:
        llm_cfg = (config or {}).get("aceprime", {}).get("local_llm", {})
        self.USE_LOCAL: bool = as_bool(llm_cfg.get("use_local", os.getenv("USE_LOCAL", "0")))
        self.LOCAL_MODEL_ID: str = str(llm_cfg.get("local_model_id") or os.getenv("LOCAL_MODEL_ID", "llama3.1"))
        self.LOCAL_SERVER_URL: str = str(
            llm_cfg.get("local_server_url") or os.getenv("LOCAL_SERVER_URL", "http://localhost:11434")
        )
        self.REQUEST_TIMEOUT: float = float(llm_cfg.get("request_timeout", os.getenv("LOCAL_REQUEST_TIMEOUT", "120")))
