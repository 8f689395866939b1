"""Configuration records for levelset2d."""

from levelset2d.config.level_set_config import LevelSetConfig

__all__ = ["LevelSetConfig"]
