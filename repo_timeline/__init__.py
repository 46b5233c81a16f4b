"""
Repo Timeline: pick and rank the best repositories of a GitHub account.
"""

__version__ = "0.1.0"
