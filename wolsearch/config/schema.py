"""Configuration schema using Pydantic."""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

TIMEOUT_MS_RANGE = (1000, 300000)
LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class Base(BaseModel):
    """Base model that accepts both camelCase and snake_case keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class WolConfig(Base):
    """Watchtower Online Library search configuration."""

    headless: bool = True
    timeout_ms: int = Field(default=30000, ge=TIMEOUT_MS_RANGE[0], le=TIMEOUT_MS_RANGE[1])
    base_url: str = "https://wol.jw.org"
    search_path: str = "/en/wol/s/r1/lp-e"
    search_type: str = "par"
    sort_by: str = "occ"
    user_agent: str = DEFAULT_USER_AGENT
    viewport_width: int = Field(default=1920, ge=320)
    viewport_height: int = Field(default=1080, ge=240)
    extra_launch_args: list[str] = Field(default_factory=list)
    close_timeout_s: float = Field(default=5.0, gt=0)


class LoggingConfig(Base):
    """Logging configuration."""

    level: str = "INFO"

    @field_validator("level", mode="before")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = str(value).upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"unknown log level: {value}")
        return level


class Config(Base):
    """Root configuration for wolsearch."""

    wol: WolConfig = Field(default_factory=WolConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
