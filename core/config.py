from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional

class Settings(BaseSettings):
    """Application settings."""

    # WorldTides API settings
    worldtides_base_url: str = "https://www.worldtides.info/api/v3"
    worldtides_api_key: Optional[str] = None
    # Placeholder credential used when running under tests
    worldtides_test_key: str = "test_key"

    # Serve synthetic tide data instead of calling WorldTides (offline/demo)
    use_mock_data: bool = False
    testing: bool = False

    # Seconds before an in-flight WorldTides request is abandoned
    request_timeout: float = 15.0

    # Root logging level name, e.g. "DEBUG"
    log_level: str = "INFO"

    # Saved location storage
    location_file: str = "data/saved_location.json"

    # Message fragments WorldTides uses when the key has run out of credits
    quota_error_patterns: list[str] = ["quota", "credit"]

    def resolve_api_key(self) -> Optional[str]:
        """Get the credential to send, substituting the placeholder in test mode."""
        if self.testing:
            return self.worldtides_test_key
        return self.worldtides_api_key

    model_config = SettingsConfigDict(
        env_prefix="tides_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

settings = Settings()
