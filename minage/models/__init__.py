# minage/models/__init__.py
"""Database models for the minimum password age service"""
from .realm import Realm, RealmPolicySetting
from .user import User
from .password_history import PasswordHistory

__all__ = ['Realm', 'RealmPolicySetting', 'User', 'PasswordHistory']
