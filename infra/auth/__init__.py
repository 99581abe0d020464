from .local_auth_provider import LocalAuthProvider

__all__ = ["LocalAuthProvider"]
