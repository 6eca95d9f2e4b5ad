import os
import logging
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

# ------------- Database -------------
DATABASE_URL = os.getenv('DATABASE_URL', 'sqlite:///./listings.db')

# ------------- JWT config (must match the identity provider) -------------
JWT_SECRET = os.getenv('JWT_SECRET_KEY', 'CHANGE_THIS_TO_A_LONG_RANDOM_STRING')
JWT_ALGORITHM = os.getenv('JWT_ALGORITHM', 'HS256')

# ------------- Object storage -------------
STORAGE_URL = os.getenv('STORAGE_URL', 'http://localhost:54321').rstrip('/')
STORAGE_SERVICE_KEY = os.getenv('STORAGE_SERVICE_KEY', '')
STORAGE_BUCKET = os.getenv('STORAGE_BUCKET', 'business-assets')
STORAGE_TIMEOUT = float(os.getenv('STORAGE_TIMEOUT', '30'))

# ------------- Listing defaults -------------
LISTING_CATEGORY_ID = os.getenv('LISTING_CATEGORY_ID', '2f12b3d2-35fa-4fda-ba30-6ca0ceab58d7')
LISTING_CATEGORY_SLUG = os.getenv('LISTING_CATEGORY_SLUG', 'futsal')
LISTING_VALIDITY_DAYS = int(os.getenv('LISTING_VALIDITY_DAYS', '365'))
DEFAULT_SLOT_DURATION_MIN = int(os.getenv('DEFAULT_SLOT_DURATION_MIN', '60'))


def warn_on_insecure_defaults():
    """Log warnings for settings that must not reach production unchanged"""
    if JWT_SECRET == 'CHANGE_THIS_TO_A_LONG_RANDOM_STRING':
        logger.warning('⚠️ WARNING: Using default JWT_SECRET. Set JWT_SECRET_KEY in .env for production!')
    if not STORAGE_SERVICE_KEY:
        logger.warning('⚠️ STORAGE_SERVICE_KEY is not set - uploads will be sent unauthenticated')
