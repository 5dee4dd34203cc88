from .auth import User
from .tax import TaxRate
from .locations import Location
from .dropdowns import DropdownItem
from .staff import Staff
from .customers import Customer

__all__ = [
    'User',
    'TaxRate',
    'Location',
    'DropdownItem',
    'Staff',
    'Customer',
]
