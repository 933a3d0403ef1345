# photofeed/utils/__init__.py
"""
Utilities shared across the project.
"""

from .datetime_utils import (
    DateTimeUtils,
    now, to_iso,
    for_firestore, from_firestore
)

__all__ = [
    'DateTimeUtils',
    'now', 'to_iso',
    'for_firestore', 'from_firestore'
]
