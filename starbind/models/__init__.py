from .user import User, UserProps

__all__ = ["User", "UserProps"]
