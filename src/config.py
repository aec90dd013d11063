"""
Configuration for FinVision.

Values are module constants with environment variable overrides so the
app, the tests and the command-line helpers all read the same settings.
"""
import os

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

# Database
DATABASE_URL = os.getenv(
    'FINVISION_DATABASE_URL',
    f"sqlite:///{os.path.join(PROJECT_ROOT, 'finvision.db')}"
)

# Sessions
SECRET_KEY = os.getenv(
    'FINVISION_SECRET_KEY',
    os.getenv('JWT_SECRET', 'fallback-secret-key-change-in-production')
)
JWT_ALGORITHM = 'HS256'
SESSION_COOKIE_NAME = 'auth-token'
SESSION_DAYS = int(os.getenv('FINVISION_SESSION_DAYS', '7'))
ENVIRONMENT = os.getenv('FINVISION_ENV', 'development')
COOKIE_SECURE = ENVIRONMENT == 'production'

# Misc
LOG_LEVEL = os.getenv('FINVISION_LOG_LEVEL', 'INFO').upper()
DEMO_MODE = os.getenv('FINVISION_DEMO_MODE', 'true').lower() in ('1', 'true', 'yes')
CURRENCY_SYMBOL = os.getenv('FINVISION_CURRENCY_SYMBOL', '₹')
MIN_PASSWORD_LENGTH = 6

# Server
HOST = os.getenv('FINVISION_HOST', '0.0.0.0')
PORT = int(os.getenv('FINVISION_PORT', '5001'))
