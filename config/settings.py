from pydantic import Field
from pydantic_settings import BaseSettings


class BotSettings(BaseSettings):
    discord_token: str = Field(default="", description="Discord bot token")
    database_url: str = Field(default="sqlite:///data/bot.db", description="Database connection URL")

    bot_prefix: str = Field(default="!", description="Default command prefix")
    log_level: str = Field(default="INFO", description="Logging level")

    # Plugin configuration
    enabled_plugins: list[str] = Field(
        default=["moderation", "utility", "admin"],
        description="List of enabled plugins",
    )
    plugin_directories: list[str] = Field(
        default=["plugins"],
        description="Directories to scan for plugins",
    )

    # Users treated as owners in every guild
    owner_ids: list[int] = Field(default_factory=list, description="Bot owner user IDs")

    # Moderation
    mute_check_interval: int = Field(default=30, description="Seconds between expired mute sweeps")

    # Development settings
    debug: bool = Field(default=False, description="Enable debug mode")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


# Global settings instance
settings = BotSettings()
