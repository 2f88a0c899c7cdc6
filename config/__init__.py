"""
Config Package - Chua cac constants va cau hinh cua ung dung

Bao gom:
- paths: Ten ung dung, thu muc project, ten bien moi truong
- app_settings: AppSettings doc tu environment mot lan khi khoi dong
"""

from config.app_settings import (
    AppSettings,
    DEFAULT_IGNORE_PATTERNS,
)

__all__ = [
    "AppSettings",
    "DEFAULT_IGNORE_PATTERNS",
]
