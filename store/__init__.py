"""
SIMS Dashboard Store Package
In-memory event series store seeded from hard-coded data
"""

from .schema import EventRecordStore
from .seed import DEFAULT_SERIES, build_store

__all__ = ['EventRecordStore', 'DEFAULT_SERIES', 'build_store']
