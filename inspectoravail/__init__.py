"""
Inspector availability resolution for the online booking scheduler.
"""

__version__ = "0.1.0"
