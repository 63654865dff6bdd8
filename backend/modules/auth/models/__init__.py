from .user_models import User

__all__ = ["User"]
