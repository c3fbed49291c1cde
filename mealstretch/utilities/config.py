"""Configuration management for the MealStretch backend."""
import os
from typing import Final, Optional
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)


def _optional(name: str) -> Optional[str]:
    value = os.getenv(name, '').strip()
    return value or None


# Provider credentials (absent -> dependent endpoints degrade, never crash)
GOOGLE_MAPS_API_KEY: Optional[str] = _optional('GOOGLE_MAPS_API_KEY')
ELEVENLABS_API_KEY: Optional[str] = _optional('ELEVENLABS_API_KEY')

# Narration voice
ELEVENLABS_VOICE_ID: Final[str] = os.getenv('ELEVENLABS_VOICE_ID', '21m00Tcm4TlvDq8ikWAM')  # "Rachel"
ELEVENLABS_MODEL_ID: Final[str] = os.getenv('ELEVENLABS_MODEL_ID', 'eleven_multilingual_v2')

# Outbound calls
PROVIDER_TIMEOUT_SECONDS: Final[float] = float(os.getenv('PROVIDER_TIMEOUT_SECONDS', '5'))
STORE_SEARCH_RADIUS_M: Final[int] = int(os.getenv('STORE_SEARCH_RADIUS_M', '5000'))

# 1 = single best meal (legacy clients), 2 = ranked list
PLAN_API_VERSION: Final[int] = int(os.getenv('PLAN_API_VERSION', '2'))

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '5000'))
LOG_LEVEL: Final[str] = os.getenv('LOG_LEVEL', 'INFO').upper()
