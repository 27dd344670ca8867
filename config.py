# config.py
import os
from pathlib import Path
from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent

load_dotenv(BASE_DIR / '.env')


class Config:
    BIBLE_API_BASE_URL = os.getenv('BIBLE_API_BASE_URL', 'https://biblia-api.vercel.app/api/v1')
    BIBLE_API_TIMEOUT = float(os.getenv('BIBLE_API_TIMEOUT', '15'))  # seconds
    READING_PLAN_START = os.getenv('READING_PLAN_START', '2026-01-01')

    ANTHROPIC_API_KEY = os.getenv('ANTHROPIC_API_KEY')
    ANTHROPIC_MODEL = os.getenv('ANTHROPIC_MODEL', 'claude-3-5-haiku-latest')

    MAX_CONTENT_LENGTH = 1 * 1024 * 1024
