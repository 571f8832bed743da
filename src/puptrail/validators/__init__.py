from .config_validators import upper_choice, lower_choice, expand_path
from .model_validators import (
    find_unknown_model_kwargs,
    get_required_columns,
    get_unique_column_sets,
    find_unique_conflicts,
)

__all__ = [
    "upper_choice",
    "lower_choice",
    "expand_path",
    "find_unknown_model_kwargs",
    "get_required_columns",
    "get_unique_column_sets",
    "find_unique_conflicts",
]
