from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    max_upload_bytes: int = Field(default=10 * 1024 * 1024, gt=0)

    pdf_engine: str = "pdfplumber"
    min_native_text_length: int = Field(default=50, ge=1)

    ocr_engine: str = "tesseract"
    ocr_language: str = "eng"
    ocr_dpi: int = Field(default=300, gt=0)

    evaluation_provider: str = "rules"
    evaluation_temperature: float = Field(default=0.0, ge=0.0, le=2.0)
    evaluation_timeout_seconds: float = Field(default=30.0, gt=0)
    max_ai_text_length: int = Field(default=30000, gt=100)

    evaluation_openai_api_key: str = ""
    evaluation_openai_model_name: str = "gpt-4o-mini"
    evaluation_openai_timeout_seconds: int = 30

    evaluation_openai_compatible_api_key: str = ""
    evaluation_openai_compatible_model_name: str = ""
    evaluation_openai_compatible_timeout_seconds: int = 30
    evaluation_openai_compatible_base_url: str = ""

    evaluation_gemini_api_key: str = ""
    evaluation_gemini_model_name: str = "gemini-1.5-flash"
    evaluation_gemini_timeout_seconds: int = 30

    evaluation_openrouter_api_key: str = ""
    evaluation_openrouter_model_name: str = ""
    evaluation_openrouter_timeout_seconds: int = 30

    evaluation_groq_api_key: str = ""
    evaluation_groq_model_name: str = ""
    evaluation_groq_timeout_seconds: int = 30

    evaluation_ollama_api_key: str = "ollama"
    evaluation_ollama_model_name: str = "llama3.2"
    evaluation_ollama_timeout_seconds: int = 60

    max_job_name_length: int = 100
    max_job_description_length: int = 2000

    status_excellent_min: int = Field(default=85, ge=0, le=100)
    status_good_min: int = Field(default=70, ge=0, le=100)
    status_fair_min: int = Field(default=50, ge=0, le=100)

    @model_validator(mode="after")
    def _check_status_thresholds(self) -> "Settings":
        if not self.status_excellent_min >= self.status_good_min >= self.status_fair_min:
            raise ValueError(
                "status thresholds must satisfy "
                "status_excellent_min >= status_good_min >= status_fair_min"
            )
        return self
