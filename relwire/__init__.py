"""
relwire - nested relation input for Django CRUD endpoints.
"""

from .defaults import LIBRARY_VERSION

__version__ = LIBRARY_VERSION
