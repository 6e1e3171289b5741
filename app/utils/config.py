# app/utils/config.py
import os
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Load .env file before defining settings
load_dotenv()

class Settings(BaseSettings):
    # Database Settings
    database_url: str = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./coding_mentor.db")
    database_echo: bool = False # Set to True to see SQL queries

    # --- Completion Service Configuration ---
    # Left unset on purpose: generation endpoints answer 500 until a key is provided.
    openai_api_key: str | None = os.getenv("OPENAI_API_KEY")
    openai_model_name: str = os.getenv("OPENAI_MODEL_NAME", "gpt-3.5-turbo")
    openai_base_url: str = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1")

    # Fixed model parameters, never taken from the request
    llm_temperature: float = 0.7
    llm_max_tokens: int = 1000
    llm_timeout_seconds: float | None = None
    llm_max_retries: int = 0

    # History pagination
    history_page_size: int = 20

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

settings = Settings()
