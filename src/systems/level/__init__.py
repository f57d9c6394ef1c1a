"""
Level system exports.
"""

from src.systems.level.level_loader import LevelLoader

__all__ = [
    'LevelLoader',
]
