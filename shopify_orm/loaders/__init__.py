from .admin_api import AdminApiLoader
from .base import Loader
from .customer_account_api import CustomerAccountApiLoader

__all__ = [
    "AdminApiLoader",
    "CustomerAccountApiLoader",
    "Loader",
]
