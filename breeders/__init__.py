"""
Schema-validated BrAPI client and table model for the breeders pages.
"""

__version__ = "0.1.0"
