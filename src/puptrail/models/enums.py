from enum import Enum


class AnimalStatus(str, Enum):
    """
    Status vocabulary recognized by the UI (colour-coded in lists).

    `Animal.status` stays free-form text in the store; values outside this set are
    kept as entered and shown with the default colour.
    """
    PLANNED = "Planned"
    IN_TRANSPORT = "In Transport"
    IN_CARE = "In Care"
    VET_PENDING = "Vet Pending"
    READY = "Ready"
    ADOPTED = "Adopted"
    TRANSFERRED = "Transferred"
    DECEASED = "Deceased"


class Sex(str, Enum):
    MALE = "M"
    FEMALE = "F"
    UNKNOWN = "Unknown"


class PersonType(str, Enum):
    ADOPTER = "Adopter"
    VET = "Vet"
    CONTACT = "Contact"
    VOLUNTEER = "Volunteer"
