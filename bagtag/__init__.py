"""
Bagtag Tracker - Core Package

This package contains the core modules for:
- Bagtag redistribution and round processing (bagtag.core)
- Persistence of players and rounds (bagtag.storage)
- Round history analytics (bagtag.history)
- Shared configuration and utilities
"""

from bagtag.config import *
