from .customer_DTO import CustomerDTO, CustomerPageDTO
from .page import PageDTO

__all__ = [
    "CustomerDTO", "CustomerPageDTO",
    "PageDTO",
]
