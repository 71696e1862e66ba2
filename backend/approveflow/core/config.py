from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    ENV: str = Field(default="dev")  # dev|prod

    # DB
    DATABASE_URL: str = Field(default="sqlite:///./approveflow.db")
    STORE_KEY: str = Field(default="approveflow_projects")

    # CORS
    CORS_ORIGINS: str = Field(default="http://localhost:3000,http://localhost:5173")

    # Files
    UPLOAD_DIR: str = Field(default="./data/uploads")
    MAX_UPLOAD_BYTES: int = Field(default=10 * 1024 * 1024)

    # Share links point at the client-facing frontend
    PUBLIC_BASE_URL: str = Field(default="http://localhost:3000")

    # Generative service (OpenAI-compatible endpoint)
    GENAI_API_KEY: str = Field(default="")
    GENAI_BASE_URL: str = Field(default="https://generativelanguage.googleapis.com/v1beta/openai/")
    GENAI_TEXT_MODEL: str = Field(default="gemini-3-flash-preview")
    GENAI_VISION_MODEL: str = Field(default="gemini-2.5-flash-image")

    # Seed (dev)
    SEED_DEMO: bool = Field(default=True)

    LOG_LEVEL: str = Field(default="INFO")


settings = Settings()
