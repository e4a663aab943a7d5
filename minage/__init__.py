"""Minimum password age policy - core engine and Flask host"""
__version__ = "1.0.0"
