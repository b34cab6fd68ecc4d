"""
Services Module

One service per dashboard screen.
"""
from .base import ScreenService
from .categories import CategoryService
from .customers import CustomerDetails, CustomerService
from .directory import AddressService, TagService
from .orders import OrderDetails, OrderService
from .products import FormOptions, ProductInput, ProductService

__all__ = [
    "ScreenService",
    "CategoryService",
    "CustomerDetails",
    "CustomerService",
    "AddressService",
    "TagService",
    "OrderDetails",
    "OrderService",
    "FormOptions",
    "ProductInput",
    "ProductService",
]
