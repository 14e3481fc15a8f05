"""Database infrastructure"""

from .base import BaseDatabase

__all__ = ["BaseDatabase"]
