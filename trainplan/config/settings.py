from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    log_level: str = Field(default="INFO", validation_alias="TRAINPLAN_LOG_LEVEL")
    log_file: str | None = Field(default=None, validation_alias="TRAINPLAN_LOG_FILE")
    log_json: bool = Field(
        default=False,
        validation_alias="TRAINPLAN_LOG_JSON",
        description="Write the log file as JSON lines",
    )
    default_experience_level: str = Field(
        default="intermediate",
        validation_alias="TRAINPLAN_DEFAULT_EXPERIENCE_LEVEL",
        description="Experience level applied when a request omits it",
    )
    default_long_run_day: str = Field(
        default="Sunday",
        validation_alias="TRAINPLAN_DEFAULT_LONG_RUN_DAY",
        description="Long run day assumed by validation when the profile has none",
    )
    estimated_minutes_per_mile: float = Field(
        default=10.0,
        validation_alias="TRAINPLAN_ESTIMATED_MINUTES_PER_MILE",
        description="Pace used to turn a running distance into a cross-training duration",
    )
    default_cross_training_minutes: int = Field(
        default=45,
        validation_alias="TRAINPLAN_DEFAULT_CROSS_TRAINING_MINUTES",
        description="Cross-training duration when a workout has neither distance nor duration",
    )
    return_run_fraction: float = Field(
        default=0.5,
        validation_alias="TRAINPLAN_RETURN_RUN_FRACTION",
        description="Fraction of the original distance run during the return-to-running week",
    )
    return_run_default_miles: float = Field(
        default=3.0,
        validation_alias="TRAINPLAN_RETURN_RUN_DEFAULT_MILES",
        description="Return-to-running distance when the original workout had no distance",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate that log level is one of the standard logging levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            logger.warning(f"Invalid LOG_LEVEL '{value}'. Valid levels are: {', '.join(valid_levels)}. Defaulting to INFO.")
            return "INFO"
        return upper_value

    @field_validator("return_run_fraction")
    @classmethod
    def validate_return_run_fraction(cls, value: float) -> float:
        """Keep the return-week fraction within (0, 1]."""
        if not 0 < value <= 1:
            logger.warning(f"Invalid return_run_fraction {value}. Defaulting to 0.5.")
            return 0.5
        return value


settings = Settings()
