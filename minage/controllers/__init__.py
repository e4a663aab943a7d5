"""Controllers exposing the password lifecycle over HTTP"""
from .auth_controller import auth_bp
from .admin_controller import admin_bp

__all__ = ['auth_bp', 'admin_bp']
