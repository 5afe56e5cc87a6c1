"""Data models."""

from tfx.models.config import ValidateConfig

__all__ = ["ValidateConfig"]
