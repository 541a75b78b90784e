"""Configuration management for the meal planner application."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'
LOG_LEVEL: Final[str] = os.getenv('LOG_LEVEL', 'DEBUG' if DEBUG else 'INFO').upper()

# Planner defaults (the planner UI offers 1..10 people, 2 preselected)
DEFAULT_HEADCOUNT: Final[int] = int(os.getenv('DEFAULT_HEADCOUNT', '2'))
MAX_HEADCOUNT: Final[int] = int(os.getenv('MAX_HEADCOUNT', '10'))

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = Path(os.getenv('PLANNER_DATA_DIR', str(BASE_DIR / 'data'))).resolve()

# Reconcile the shopping list whenever the planned meals change
AUTO_UPDATE_SHOPPING_LIST: Final[bool] = os.getenv('AUTO_UPDATE_SHOPPING_LIST', 'True').lower() == 'true'
