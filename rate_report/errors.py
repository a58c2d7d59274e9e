"""Exceptions raised while building a rate report."""


class ReportError(Exception):
    """Base exception for all report generation errors."""
    pass


class ConfigError(ReportError):
    """Raised when the report configuration is missing or invalid."""
    pass


class SheetTitleConflictError(ReportError):
    """Raised when two rate categories would produce the same sheet title."""
    pass


class SheetTitleTooLongError(ReportError):
    """Raised when a sheet title exceeds Excel's 31-character limit."""
    pass


class DuplicateRateError(ReportError):
    """Raised when a weight tier already holds a rate for the row's zone.

    Duplicate rates mean the source data is corrupt, so the whole run stops.
    """

    def __init__(self, category_key: str, weight_tier_key: str, zone: str,
                 existing_rate: str, new_rate: str):
        self.category_key = category_key
        self.weight_tier_key = weight_tier_key
        self.zone = zone
        self.existing_rate = existing_rate
        self.new_rate = new_rate
        super().__init__(
            "Duplicate shipping rate data exists in the dataset "
            f"(category '{category_key}', weight tier '{weight_tier_key}', "
            f"zone '{zone}': {existing_rate} vs {new_rate}). "
            "Validate data and rerun."
        )
