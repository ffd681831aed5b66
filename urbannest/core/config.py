from pydantic_settings import BaseSettings
from pydantic import Field

class Settings(BaseSettings):
    APP_NAME: str = "UrbanNest Auth API"
    APP_VERSION: str = "0.1.0"
    MONGO_URI: str = Field(default="mongodb://localhost:27017")
    MONGO_DB: str = Field(default="urbannest")
    JWT_SECRET_KEY: str = Field(...)
    JWT_ALGORITHM: str = Field(default="HS256")
    JWT_EXPIRATION_HOURS: int = Field(default=24)
    RESET_TOKEN_EXPIRE_MINUTES: int = Field(default=30)
    PASSWORD_MIN_LENGTH: int = Field(default=6)
    FRONTEND_URL: str = Field(default="http://localhost:3000")
    BREVO_API_KEY: str = Field(default="")
    EMAIL_SENDER_NAME: str = Field(default="UrbanNest")
    EMAIL_SENDER_ADDRESS: str = Field(default="no-reply@urbannest.com")
    LOG_LEVEL: str = Field(default="INFO")

    class Config:
        env_file = ".env"
        env_file_encoding = 'utf-8'

settings = Settings()
