from .errors import (
    error_response,
    coerce_id,
    ServiceError,
    ValidationError,
    NotFoundError,
    InvalidArgumentError,
)
from .addon_keys import addon_key, unique_addons, unique_addon_keys, decamelize
