"""Domain-specific exceptions"""

from typing import List


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class MarginValidationError(DomainException):
    """Margin input failed validation; carries every reason found"""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class VehicleNotFoundError(DomainException):
    """No stock or purchase record exists for the vehicle"""

    pass
