from .settings import get_settings, settings
from .table_names import TableNames

__all__ = [
    "settings",
    "get_settings",
    "TableNames",
]
