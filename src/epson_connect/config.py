# src/epson_connect/config.py
'''
Import configuration using .env
'''
from pathlib import Path
from functools import lru_cache
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# from src/epson_connect/config.py up to project root (where .env lives)
BASE_DIR = Path(__file__).resolve().parents[2]
load_dotenv(dotenv_path=BASE_DIR / ".env")

DEFAULT_BASE_URL = "https://api.epsonconnect.com"


class Settings(BaseSettings):
    '''
    SDK Settings class
    Credentials are usually set in the .env file or the environment,
    explicit Client arguments take precedence over them
    '''
    EPSON_CONNECT_API_PRINTER_EMAIL: str = ''
    EPSON_CONNECT_API_CLIENT_ID: str = ''
    EPSON_CONNECT_API_CLIENT_SECRET: str = ''
    EPSON_CONNECT_API_BASE_URL: str = DEFAULT_BASE_URL

    HTTP_TIMEOUT: float = 10.0

    DEBUG: bool = False
    LOG_FILE: str | None = None

    class Config:
        '''
        Config for Settings
        '''
        env_file = BASE_DIR / ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    '''
    Get settings for something like singleton
    '''
    return Settings()
