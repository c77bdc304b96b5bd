"""
dirwatch - recursive directory registration for file-change notifications.
"""

__version__ = "0.1.0"
