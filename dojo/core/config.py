from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./dojo.db"
    ACCESS_CODE_LENGTH: int = 6
    # Resetting a decided final-round match takes the credited win back.
    REVOKE_WIN_ON_RESET: bool = False
    HALL_OF_FAME_SIZE: int = 20
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"

settings = Settings()
