"""Service layer for business logic"""
from .auth_services import AuthService
from .realm_service import RealmService

__all__ = ['AuthService', 'RealmService']
