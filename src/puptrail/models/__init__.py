r"""
Centralized access to all database models of the rescue store.

Importing this package registers every table on `Base.metadata`, which is what
`database.session.init_store()` relies on before `create_all`.

    from puptrail.models import Animal, Person, VetVisit
"""

from .enums import AnimalStatus, PersonType, Sex
from .animal import Animal
from .person import Person
from .trip import Trip, TripAnimal
from .vet import VetVisit, VetService
from .adoption import Adoption
from .finance import Expense, Income, MoneyOwed
from .attachment import FileAttachment
from .intake import Intake
from .puppy_group import PuppyGroup
from .license import License

__all__ = [
    "AnimalStatus",
    "PersonType",
    "Sex",
    "Animal",
    "Person",
    "Trip",
    "TripAnimal",
    "VetVisit",
    "VetService",
    "Adoption",
    "Expense",
    "Income",
    "MoneyOwed",
    "FileAttachment",
    "Intake",
    "PuppyGroup",
    "License",
]
