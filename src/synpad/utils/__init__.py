"""
Utility package for configuration and logging setup.
"""

from .config import Settings, configure_logging

__all__ = ['Settings', 'configure_logging']
