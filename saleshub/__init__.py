"""
SalesHub - AI Sales Assistant service
"""

__version__ = "1.0.0"
