# src/puptrail/core/logging/
# ├─ __init__.py            # public API: setup_logging, set_operation_id, OperationIdFilter
# ├─ builder.py             # make_dict_config(settings) + setup_logging(settings)
# ├─ formatters.py          # JsonFormatter, ColorFormatter
# ├─ filters.py             # OperationIdFilter, RedactFilter (+ contextvar helpers)
# └─ handlers.py            # console / rotating file handler factories


from .builder import setup_logging, make_dict_config
from .filters import set_operation_id, get_operation_id, reset_operation_id, OperationIdFilter, RedactFilter

__all__ = [
    "setup_logging",
    "make_dict_config",
    "set_operation_id",
    "get_operation_id",
    "reset_operation_id",
    "OperationIdFilter",
    "RedactFilter",
]
