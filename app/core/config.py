import os
from typing import List

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '../../'))
load_dotenv(os.path.join(BASE_DIR, '.env'))


class Settings(BaseSettings):
    PROJECT_NAME: str = os.getenv('PROJECT_NAME', 'REHAB TELEMETRY')
    SECRET_KEY: str = os.getenv('SECRET_KEY', 'rehab-secret-change-me-in-production-0000')
    API_PREFIX: str = '/api'
    BACKEND_CORS_ORIGINS: List[str] = ['*']
    DATABASE_URL: str = os.getenv('SQL_DATABASE_URL', 'sqlite:///' + os.path.join(BASE_DIR, 'rehab.db'))
    ACCESS_TOKEN_EXPIRE_SECONDS: int = 60 * 60 * 24 * 7  # Token expired after 7 days
    SECURITY_ALGORITHM: str = 'HS256'
    LOGGING_CONFIG_FILE: str = os.path.join(BASE_DIR, 'logging.ini')

    # Relay hub
    RELAY_QUEUE_SIZE: int = int(os.getenv('RELAY_QUEUE_SIZE', '64'))

    # Progress / history
    PROGRESS_MAX_RETRIES: int = int(os.getenv('PROGRESS_MAX_RETRIES', '3'))
    HISTORY_DEFAULT_DAYS: int = int(os.getenv('HISTORY_DEFAULT_DAYS', '7'))
    HISTORY_RECENT_LIMIT: int = int(os.getenv('HISTORY_RECENT_LIMIT', '10'))
    TIMEZONE: str = os.getenv('TIMEZONE', 'UTC')


settings = Settings()
