import os


class Config:
    """Application configuration from environment variables."""

    # Database
    DATABASE_URL = os.environ.get('DATABASE_URL', 'sqlite:///fuel_tracker.db')

    # Flask
    SECRET_KEY = os.environ.get('SECRET_KEY', 'dev-secret-key-change-in-production')
    FLASK_ENV = os.environ.get('FLASK_ENV', 'production')
    DEBUG = FLASK_ENV == 'development'

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # Server
    FLASK_HOST = os.environ.get('FLASK_HOST', '0.0.0.0')
    FLASK_PORT = int(os.environ.get('FLASK_PORT', 8080))
    RATELIMIT_ENABLED = os.environ.get('RATELIMIT_ENABLED', 'true').lower() == 'true'

    # Defaults for a fresh install
    DEFAULT_IS_METRIC = os.environ.get('DEFAULT_IS_METRIC', 'true').lower() == 'true'
    DEFAULT_CURRENCY = os.environ.get('DEFAULT_CURRENCY', 'USD')
    DEFAULT_THEME_MODE = os.environ.get('DEFAULT_THEME_MODE', 'system')
    DEFAULT_PRICE_PER_LITER = float(os.environ.get('DEFAULT_PRICE_PER_LITER', 1.5))

    # Plausibility thresholds (soft warnings at entry time)
    MAX_VOLUME_LITERS = float(os.environ.get('MAX_VOLUME_LITERS', 200))
    MAX_PRICE_PER_LITER = float(os.environ.get('MAX_PRICE_PER_LITER', 10))
    MAX_ODOMETER = float(os.environ.get('MAX_ODOMETER', 1000000))
