"""Service configuration: LLM provider, export defaults and server knobs."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_prefix": "CHRONOSEC_"}

    # LLM
    llm_provider: str = "openai"
    anthropic_api_key: str = ""
    openai_api_key: str = ""
    llm_model: str = "gpt-4o"
    llm_temperature: float = 0.2
    llm_timeout_seconds: float = 60.0

    # Timeline defaults
    default_framework: str = ""

    # Export
    document_classification: str = "CONFIDENTIAL"

    # Observability
    log_level: str = "INFO"
    otlp_endpoint: str = ""

    # Server
    host: str = "0.0.0.0"
    port: int = 8200


settings = Settings()
