"""
app/validators package marker.
"""

from app.validators.marketing_data_validator import (
    REQUIRED_COLUMNS,
    MarketingDataValidator,
    ResolvedColumns,
    ValidationOutcome,
    resolve_columns,
)

__all__ = [
    "REQUIRED_COLUMNS",
    "MarketingDataValidator",
    "ResolvedColumns",
    "ValidationOutcome",
    "resolve_columns",
]
