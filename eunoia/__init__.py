"""
4Eunoia - personal productivity and wellness service
"""

__version__ = "1.0.0"
