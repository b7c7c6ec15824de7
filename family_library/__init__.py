# family_library/__init__.py
"""
Steam Family library extractor.

Scrolls the family library page until every lazily loaded game tile has
rendered, then exports the grouped list as text or JSON.
"""

from .driver import ConvergenceDriver, RenderSurface, WrongSurfaceError
from .models import LibraryAccumulator, LibraryItem, LibraryRecord, LibraryReport
from .parser import LibraryPageParser, LibrarySnapshot

__all__ = [
    'ConvergenceDriver',
    'RenderSurface',
    'WrongSurfaceError',
    'LibraryAccumulator',
    'LibraryItem',
    'LibraryRecord',
    'LibraryReport',
    'LibraryPageParser',
    'LibrarySnapshot',
]
