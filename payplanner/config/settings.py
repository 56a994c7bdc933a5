"""
Configuration manager for application settings
"""

from typing import Dict

class ConfigurationManager:
    """Holds application-wide constants shared by services and controllers"""

    def __init__(self):
        self._app_config = self._initialize_app_config()

    def _initialize_app_config(self) -> Dict:
        """Initialize application-wide configuration"""
        return {
            # List endpoints
            'DEFAULT_PAGE_SIZE': 50,
            'MIN_PAGE_SIZE': 1,
            'MAX_PAGE_SIZE': 500,

            # Activity log read endpoint
            'ACTIVITY_DEFAULT_PAGE_SIZE': 50,
            'ACTIVITY_MIN_PAGE_SIZE': 10,
            'ACTIVITY_MAX_PAGE_SIZE': 200,
            'ACTIVITY_METADATA_MAX_STRING': 200,
            'ACTIVITY_EXCLUDED_PREFIX': '/api/user-activity',

            # DaData suggestions
            'DADATA_DEFAULT_BASE_URL': 'https://suggestions.dadata.ru/suggestions/api/4_1/rs/',
            'DADATA_DEFAULT_TIMEOUT_SECONDS': 15,
            'DADATA_DEFAULT_LIMIT': 5,
            'DADATA_MAX_LIMIT': 20,
            'DADATA_MAX_ATTEMPTS': 3,
        }

    def get_app_config(self, key: str, default=None):
        """Get application configuration value"""
        return self._app_config.get(key, default)

    def clamp_page_size(self, page_size: int) -> int:
        """Clamp a list page size into the allowed range"""
        low = self._app_config['MIN_PAGE_SIZE']
        high = self._app_config['MAX_PAGE_SIZE']
        return max(low, min(high, page_size))
