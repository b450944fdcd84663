# -----------------------------------------------------------------------------
# Created: 2026-02-01
# Description: Config
# -----------------------------------------------------------------------------

import os
from dataclasses import dataclass
from dotenv import load_dotenv, find_dotenv

# Load .env once globally
load_dotenv(find_dotenv(usecwd=True), override=False)


@dataclass(frozen=True)
class Config:
    # OpenAI (embeddings)
    openai_api_key: str
    openai_base_url: str = ""
    embed_model: str = "text-embedding-3-small"
    embed_dimensions: int = 0  # 0 -> model default

    # Local storage
    db_path: str = "./data/knowledge.db"
    index_path: str = "./data/vectors.index"

    # Vector index
    index_backend: str = "faiss"  # "faiss" | "chroma"
    chroma_collection: str = "kb_vectors"
    max_elements: int = 100000

    # ---- Single source of truth: field_name -> ENV VAR NAME ----
    ENV_VARS = {
        "openai_api_key": "OPENAI_API_KEY",
        "openai_base_url": "OPENAI_BASE_URL",  # e.g. https://api.openai.com/v1
        "embed_model": "KB_EMBED_MODEL",
        "embed_dimensions": "KB_EMBED_DIMENSIONS",
        "db_path": "KB_DB_PATH",
        "index_path": "KB_INDEX_PATH",
        "index_backend": "KB_INDEX_BACKEND",
        "chroma_collection": "KB_CHROMA_COLLECTION",
        "max_elements": "KB_MAX_ELEMENTS",
    }

    REQUIRED_FIELDS = ("openai_api_key",)
    INT_FIELDS = ("embed_dimensions", "max_elements")
    INDEX_BACKENDS = ("faiss", "chroma")

    @staticmethod
    def from_env() -> "Config":
        """Build Config object from environment variables; unset vars keep defaults."""
        kwargs = {}
        for field_name, env_name in Config.ENV_VARS.items():
            raw = (os.getenv(env_name) or "").strip()
            if raw == "":
                if field_name in Config.REQUIRED_FIELDS:
                    kwargs[field_name] = ""
                continue
            if field_name in Config.INT_FIELDS:
                try:
                    kwargs[field_name] = int(raw)
                except ValueError as e:
                    raise ValueError(f"Env var {env_name} must be an int, got {raw!r}") from e
            else:
                kwargs[field_name] = raw
        return Config(**kwargs)

    def __post_init__(self):
        """Fail fast if any required config is missing or out of range."""
        missing_fields = [f for f in self.REQUIRED_FIELDS if not getattr(self, f)]
        if missing_fields:
            missing_env_vars = [self.ENV_VARS[f] for f in missing_fields]
            raise ValueError(f"Missing required environment variables: {missing_env_vars}")

        if self.index_backend not in self.INDEX_BACKENDS:
            raise ValueError(
                f"{self.ENV_VARS['index_backend']} must be one of {self.INDEX_BACKENDS}, "
                f"got {self.index_backend!r}"
            )
        if self.max_elements <= 0:
            raise ValueError(f"max_elements must be > 0, got {self.max_elements}")
        if self.embed_dimensions < 0:
            raise ValueError(f"embed_dimensions must be >= 0, got {self.embed_dimensions}")

    def summary(self) -> dict:
        """Return a safe, non-sensitive summary for logging."""
        return {
            "openai_base_url": self.openai_base_url or "default",
            "embed_model": self.embed_model,
            "embed_dimensions": self.embed_dimensions or "model default",
            "db_path": self.db_path,
            "index_path": self.index_path,
            "index_backend": self.index_backend,
            "max_elements": self.max_elements,
        }
