# =============================================================================
# utils/config.py - Directory connection settings
# =============================================================================

import os
from typing import Optional, List
from dotenv import load_dotenv

REQUIRED_AD_VARS = ("AD_SERVER", "AD_USERNAME", "AD_PASSWORD")
FALSE_VALUES = ("0", "false", "no", "off")


class Config:
    """AD bind settings, read from the environment after loading .env"""

    def __init__(self):
        load_dotenv()

    @staticmethod
    def _get(name: str) -> Optional[str]:
        return os.getenv(name) or None

    @property
    def ad_server(self) -> Optional[str]:
        return self._get("AD_SERVER")

    @property
    def ad_username(self) -> Optional[str]:
        return self._get("AD_USERNAME")

    @property
    def ad_password(self) -> Optional[str]:
        return self._get("AD_PASSWORD")

    @property
    def base_dn(self) -> Optional[str]:
        """Domain DN override; the RootDSE defaultNamingContext is used when unset"""
        return self._get("BASE_DN")

    @property
    def use_ssl(self) -> bool:
        return (self._get("AD_USE_SSL") or "true").strip().lower() not in FALSE_VALUES

    def get_missing_ad_vars(self) -> List[str]:
        return [name for name in REQUIRED_AD_VARS if not self._get(name)]

    def validate_ad_config(self) -> bool:
        return not self.get_missing_ad_vars()
