"""
Legalchat: jurisdiction-aware legal question answering over indexed statutes.
"""

__version__ = "0.1.0"
