"""Configuration management for the Care Plan application."""
import os
from decimal import Decimal
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

from careplan.utilities.constants import DEFAULT_UNIT_PRICE, DEFAULT_CO_PAY_RATIO, DEFAULT_CARE_LEVEL

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'

# Billing
UNIT_PRICE: Final[int] = int(os.getenv('UNIT_PRICE', str(DEFAULT_UNIT_PRICE)))
CO_PAY_RATIO: Final[Decimal] = Decimal(os.getenv('CO_PAY_RATIO', DEFAULT_CO_PAY_RATIO))
DEFAULT_LEVEL: Final[int] = int(os.getenv('DEFAULT_CARE_LEVEL', str(DEFAULT_CARE_LEVEL)))

# Identity handle used when the caller does not send one
DEFAULT_USER_HANDLE: Final[str] = os.getenv('DEFAULT_USER_HANDLE', 'demo-user')

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = Path(os.getenv('CAREPLAN_DATA_DIR', str(BASE_DIR / 'data')))
