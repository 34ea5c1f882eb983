"""
Utilities Package
Configuration and logging setup
"""

from .config import Settings
from .logger import configure_logging

__all__ = ['Settings', 'configure_logging']
