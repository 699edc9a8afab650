"""
TRADE semantics - indicator condition schema and validation.
"""

__version__ = "0.1.0"
