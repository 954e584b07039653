"""
elfcat Shared Module
====================

Configuration, logging and console infrastructure used by every elfcat
component.
"""

from shared.config import ElfcatConfig, get_config

__all__ = ["ElfcatConfig", "get_config"]
