"""Authentication use cases."""

from .service import AuthResult, AuthService

__all__ = ["AuthResult", "AuthService"]
