"""
Configuration
"""

from .settings import CMSSettings, get_cms_settings, reset_cms_settings

__all__ = ["CMSSettings", "get_cms_settings", "reset_cms_settings"]
