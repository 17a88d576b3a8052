"""Configuration models for the content core."""

from .config import AccountConfig, Config, ReportConfig, load_config, save_config

__all__ = ["AccountConfig", "Config", "ReportConfig", "load_config", "save_config"]
