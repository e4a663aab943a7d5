"""Utility functions and decorators"""
