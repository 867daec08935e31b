"""
Speed Reader

Terminal speed reading with live pace control and an AI comprehension check.
"""

__version__ = "1.0.0"
