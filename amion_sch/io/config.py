"""Configuration loading utility (re-exports amion_sch.config)."""

from amion_sch.config import DecoderConfig, config_from_dict, load_config

__all__ = ["load_config", "config_from_dict", "DecoderConfig"]
