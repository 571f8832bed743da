from .base_repository import BaseRepository
from .animal_repository import AnimalRepository
from .person_repository import PersonRepository
from .trip_repository import TripRepository
from .vet_visit_repository import VetVisitRepository
from .adoption_repository import AdoptionRepository
from .expense_repository import ExpenseRepository
from .income_repository import IncomeRepository
from .intake_repository import IntakeRepository
from .money_owed_repository import MoneyOwedRepository
from .puppy_group_repository import PuppyGroupRepository
from .file_attachment_repository import FileAttachmentRepository
from .license_repository import LicenseRepository

__all__ = [
    "BaseRepository",
    "AnimalRepository",
    "PersonRepository",
    "TripRepository",
    "VetVisitRepository",
    "AdoptionRepository",
    "ExpenseRepository",
    "IncomeRepository",
    "IntakeRepository",
    "MoneyOwedRepository",
    "PuppyGroupRepository",
    "FileAttachmentRepository",
    "LicenseRepository",
]
