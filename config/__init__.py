"""配置模块"""
from config.settings import Settings, settings

__all__ = ["Settings", "settings"]
