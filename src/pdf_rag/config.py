"""Shared configuration loaded from environment / .env file."""

from __future__ import annotations

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application-wide settings, populated from env vars or .env file."""

    # Embedding
    hf_token: str = Field(
        default="",
        description="Hugging Face token. When set, embeddings use the hosted inference API.",
    )
    hf_embedding_url: str = (
        "https://api-inference.huggingface.co/pipeline/feature-extraction/"
        "sentence-transformers/all-MiniLM-L6-v2"
    )
    ollama_host: str = "http://localhost:11434"
    ollama_embedding_model: str = "nomic-embed-text"
    embedding_timeout: float = 60.0

    # Chunking
    chunk_size: int = Field(default=1000, gt=0, description="Maximum characters per chunk")
    chunk_overlap: int = Field(default=100, ge=0, description="Characters shared by consecutive chunks")

    # Retrieval
    retrieval_k: int = Field(default=3, ge=1)

    # LLM
    groq_api_key: str = ""
    groq_base_url: str = "https://api.groq.com/openai/v1"
    groq_model_name: str = "llama-3.1-8b-instant"
    openai_api_key: str = Field(default="", description="OpenAI API key (or dummy value for a local server)")
    llm_model_name: str = "llama3"
    llm_base_url: str = Field(
        default="http://localhost:11434/v1",
        description=(
            "Base URL of an OpenAI-compatible completion API. Defaults to the "
            "local Ollama server; leave empty to use OpenAI cloud."
        ),
    )
    llm_temperature: float = 0.0
    llm_timeout: float = 120.0

    # Serving
    host: str = "0.0.0.0"
    port: int = 3001
    data_dir: str = "./data"
    upload_dir: str = "uploads"
    frontend_dir: str = "../frontend"
    max_upload_bytes: int = 20 * 1024 * 1024
    documents_view_limit: int = 100
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    @model_validator(mode="after")
    def _check_chunking(self) -> Settings:
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError(
                f"chunk_overlap ({self.chunk_overlap}) must be < chunk_size ({self.chunk_size})"
            )
        return self


# Singleton — import `settings` wherever needed.
settings = Settings()
