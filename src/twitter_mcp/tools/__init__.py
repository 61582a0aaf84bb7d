# Import all tool modules to register them with the registry
from . import (  # noqa: F401
    engagement,
    posting,
    trends,
    tweets,
    users,
)
