"""Environment-driven configuration for the gateway."""

from .app_config import AppConfig, get_app_config  # noqa: F401
from .llm_config import ModelServerConfig, get_model_server_config  # noqa: F401
from .prompt_config import PromptConfig, get_prompt_config  # noqa: F401
from .rag_config import RagConfig, get_rag_config  # noqa: F401
