from .base import BaseModel
from .admin import AdminUser

__all__ = [
    "BaseModel",
    "AdminUser",
]
