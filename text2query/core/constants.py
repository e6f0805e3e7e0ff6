from enum import Enum


class Dialect(str, Enum):
    """Supported target query dialects"""

    SQL = "sql"
    MONGODB = "mongodb"

    @property
    def label(self) -> str:
        return "SQL" if self is Dialect.SQL else "MongoDB"

    @property
    def syntax_name(self) -> str:
        return "SQL" if self is Dialect.SQL else "MongoDB query syntax"

    @classmethod
    def parse(cls, value: object) -> "Dialect | None":
        """Case-insensitive lookup; None for anything unrecognized."""
        if not isinstance(value, str):
            return None
        try:
            return cls(value.lower())
        except ValueError:
            return None


class OllamaModels(Enum):
    """Supported Ollama model identifiers"""

    LLAMA3_8B = "llama3.1:8b"
    LLAMA3_70B = "llama3:70b"
    MISTRAL_7B = "mistral:7b"
    GEMMA_2_9B = "gemma2:9b"
    QWEN_CODER_7B = "qwen2.5-coder:7b"


class AppSettings:
    """Central place for all application-level configuration"""

    OLLAMA_MODEL: OllamaModels = OllamaModels.QWEN_CODER_7B
    OLLAMA_BASE_URL: str = "http://localhost:11434"
    HOST: str = "0.0.0.0"
    PORT: int = 5000
    API_URL: str = "http://localhost:5000"
    HISTORY_FILE: str = "~/.text2query/local_storage.json"
    HISTORY_KEY: str = "queryHistory"
    HISTORY_LIMIT: int = 10
