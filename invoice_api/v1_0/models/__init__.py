from .base import Base
from .constraints import ColumnRule, CUSTOMER_RULES
from .customer import Customer
__all__ = [
    "Base",
    "ColumnRule",
    "CUSTOMER_RULES",
    "Customer",
]
