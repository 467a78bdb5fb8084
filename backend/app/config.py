from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.grouping import GroupingStrategy


class Settings(BaseSettings):
    # MongoDB Configuration
    mongodb_url: str = Field(default="mongodb://localhost:27017", alias="MONGODB_URL")
    mongodb_db_name: str = Field(default="classroom_groups", alias="MONGODB_DB_NAME")
    mongodb_server_selection_timeout_ms: int = Field(
        default=5000, alias="MONGODB_SERVER_SELECTION_TIMEOUT_MS"
    )

    # Application Settings
    app_name: str = Field(default="Classroom Groups", alias="APP_NAME")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # CORS Configuration
    allowed_origins: str = Field(
        default="http://localhost:5173,http://localhost:3000", alias="ALLOWED_ORIGINS"
    )

    # Grouping Defaults
    default_group_size: int = Field(default=3, ge=1, alias="DEFAULT_GROUP_SIZE")
    default_grouping_strategy: str = Field(
        default="allow-smaller", alias="DEFAULT_GROUPING_STRATEGY"
    )
    max_group_size: int = Field(default=20, ge=1, alias="MAX_GROUP_SIZE")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @model_validator(mode="after")
    def check_grouping_defaults(self) -> "Settings":
        if self.default_group_size > self.max_group_size:
            raise ValueError("DEFAULT_GROUP_SIZE must not exceed MAX_GROUP_SIZE")
        try:
            GroupingStrategy(self.default_grouping_strategy)
        except ValueError:
            raise ValueError(
                f"Unknown DEFAULT_GROUPING_STRATEGY: {self.default_grouping_strategy!r}"
            ) from None
        return self


settings = Settings()
