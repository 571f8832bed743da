from .base import EntitySchema, Money, validate_create, validate_update
from .animal import AnimalCreate
from .person import PersonCreate
from .trip import TripCreate
from .vet import VetVisitCreate, VetServiceCreate
from .adoption import AdoptionCreate
from .finance import ExpenseCreate, IncomeCreate, MoneyOwedCreate, PaymentCreate
from .records import IntakeCreate, PuppyGroupCreate, FileAttachmentCreate, LicenseCreate

__all__ = [
    "EntitySchema",
    "Money",
    "validate_create",
    "validate_update",
    "AnimalCreate",
    "PersonCreate",
    "TripCreate",
    "VetVisitCreate",
    "VetServiceCreate",
    "AdoptionCreate",
    "ExpenseCreate",
    "IncomeCreate",
    "MoneyOwedCreate",
    "PaymentCreate",
    "IntakeCreate",
    "PuppyGroupCreate",
    "FileAttachmentCreate",
    "LicenseCreate",
]
