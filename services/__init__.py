"""
Service layer for Image Transform
"""

from .image_engine import ImageEngine

__all__ = ["ImageEngine"]
