"""Service layer exports."""
from rentalshop.services import income_service

__all__ = ["income_service"]
