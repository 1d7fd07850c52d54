from pydantic import AliasChoices, Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

CLOUD_VISION_URI = "https://vision.googleapis.com/v1/images:annotate"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=None, extra="ignore", validate_assignment=True)

    VISION_OCR_VERSION: str = Field("0.1.0", min_length=1)
    VISION_OCR_LOG_LEVEL: int = Field(30, ge=0, le=50)

    # bearer token, e.g. `gcloud auth application-default print-access-token`
    VISION_OCR_API_KEY: str | None = Field(
        None,
        validation_alias=AliasChoices("VISION_OCR_API_KEY", "GCV_API_KEY"),
    )
    VISION_OCR_ENDPOINT: str = Field(CLOUD_VISION_URI, min_length=1)
    VISION_OCR_TIMEOUT: float = Field(30.0, gt=0)

    # comma separated BCP-47 codes, e.g. "en,ja"
    VISION_OCR_LANGUAGE_HINTS: str = ""

    @field_validator("VISION_OCR_API_KEY", mode="before")
    @classmethod
    def blank_api_key_is_unset(cls, value: str | None) -> str | None:
        if value is None or not str(value).strip():
            return None
        return str(value).strip()

    @field_validator("VISION_OCR_ENDPOINT")
    @classmethod
    def validate_endpoint(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"Invalid VISION_OCR_ENDPOINT: {value}")
        return value

    @computed_field  # type: ignore[prop-decorator]
    @property
    def LOG_LEVEL(self) -> int:
        # 50 - CRITICAL, 40 - ERROR, 30 - WARNING, 20 - INFO, 10 - DEBUG, 0 - NOTSET
        return self.VISION_OCR_LOG_LEVEL

    @computed_field  # type: ignore[prop-decorator]
    @property
    def API_KEY(self) -> str | None:
        return self.VISION_OCR_API_KEY

    @computed_field  # type: ignore[prop-decorator]
    @property
    def ENDPOINT(self) -> str:
        return self.VISION_OCR_ENDPOINT

    @computed_field  # type: ignore[prop-decorator]
    @property
    def TIMEOUT(self) -> float:
        return self.VISION_OCR_TIMEOUT

    @computed_field  # type: ignore[prop-decorator]
    @property
    def LANGUAGE_HINTS(self) -> list[str]:
        return [hint.strip() for hint in self.VISION_OCR_LANGUAGE_HINTS.split(",") if hint.strip()]

settings = Settings() # type: ignore[call-arg]
