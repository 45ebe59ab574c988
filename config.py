"""
Application configuration
Read from environment variables or a .env file
"""
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings"""

    APP_NAME: str = "Hotel Reservation Engine"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Load the sample rooms and guests on startup
    SEED_SAMPLE_DATA: bool = True

    # False: a stay ending on day X blocks another starting on day X
    STRICT_DATE_OVERLAP: bool = False

    ROOM_CHARGE_DESCRIPTION: str = "Room Charge"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True)


settings = Settings()
