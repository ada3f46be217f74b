import re
from functools import lru_cache

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError

# The server always listens on every interface; only the port is configurable
BIND_HOST = "0.0.0.0"

PORT_RE = re.compile(r"\+?[0-9]+")


class Settings(BaseSettings):
    # App
    APP_NAME: str = "Compute Demo"
    LOG_LEVEL: str = "INFO"
    
    # Server
    PORT: int = Field(default=8080, ge=0, le=65535)
    
    # Compute
    # None means one reduction worker per CPU
    COMPUTE_WORKERS: int | None = Field(default=None, ge=1)

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    @field_validator("PORT", mode="before")
    @classmethod
    def validate_port_digits(cls, value: object) -> object:
        """Reject port strings that are not plain unsigned digits.
        
        Lax int coercion would otherwise accept whitespace, underscores
        and ``"8080.0"``.
        """
        if isinstance(value, str) and not PORT_RE.fullmatch(value):
            raise ValueError("port must be an unsigned integer")
        return value


def load_settings() -> Settings:
    """Load settings from the environment, failing loudly on bad values.
    
    Returns:
        Validated settings.
        
    Raises:
        ConfigurationError: If any variable is present but unparsable.
    """
    try:
        return Settings()
    except ValidationError as exc:
        errors = [
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        ]
        raise ConfigurationError(errors) from exc


@lru_cache()
def get_settings() -> Settings:
    return load_settings()
