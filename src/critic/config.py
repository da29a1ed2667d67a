from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MODEL = "Qwen/Qwen2.5-Coder-7B-Instruct"
DEFAULT_BASE_URL = "https://router.huggingface.co/v1"
DEFAULT_TIMEOUT_MS = 45_000


class CritiqueConfig(BaseModel):
    """Everything the model invoker needs, resolved once at process start."""

    model_config = ConfigDict(frozen=True)

    api_key: Optional[SecretStr] = Field(
        default=None, description="Access credential for the model endpoint"
    )
    model: str = Field(default=DEFAULT_MODEL, description="Model identifier")
    timeout_ms: int = Field(default=DEFAULT_TIMEOUT_MS, gt=0)
    base_url: str = Field(default=DEFAULT_BASE_URL)
    max_retries: int = Field(
        default=2, ge=0, description="Retries performed inside the client library"
    )

    # Fixed sampling policy, never taken from the request
    temperature: float = 0.2
    max_tokens: int = 1400

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000

    @property
    def has_credential(self) -> bool:
        return self.api_key is not None and bool(self.api_key.get_secret_value())


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Model endpoint
    HF_TOKEN: str = ""
    HF_MODEL: str = DEFAULT_MODEL
    HF_BASE_URL: str = DEFAULT_BASE_URL
    HF_MAX_RETRIES: int = 2

    # Hard upper bound for one critique call
    CRITIQUE_TIMEOUT_MS: int = DEFAULT_TIMEOUT_MS

    LOG_LEVEL: str = "INFO"

    # YAML or JSON file with the sample catalogue, empty for none
    SAMPLES_PATH: str = ""

    @field_validator("HF_MODEL", mode="before")
    @classmethod
    def default_model_when_blank(cls, value):
        if value is None or not str(value).strip():
            return DEFAULT_MODEL
        return value

    @field_validator("CRITIQUE_TIMEOUT_MS", mode="before")
    @classmethod
    def default_timeout_when_invalid(cls, value):
        try:
            timeout = float(value)
        except (TypeError, ValueError):
            return DEFAULT_TIMEOUT_MS
        if timeout != timeout or timeout <= 0 or timeout == float("inf"):
            return DEFAULT_TIMEOUT_MS
        return max(int(timeout), 1)

    def critique_config(self) -> CritiqueConfig:
        return CritiqueConfig(
            api_key=SecretStr(self.HF_TOKEN) if self.HF_TOKEN else None,
            model=self.HF_MODEL,
            timeout_ms=self.CRITIQUE_TIMEOUT_MS,
            base_url=self.HF_BASE_URL,
            max_retries=self.HF_MAX_RETRIES,
        )
