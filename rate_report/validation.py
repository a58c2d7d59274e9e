"""Row validation for rate records.

Every field of a rate record is needed to place it in the report, so a record
with any null field is skipped as a whole. Skipping is not an error.
"""

from rate_report.models import RATE_FIELDS, RateRecord


def missing_fields(record: RateRecord) -> list[str]:
    """Return the names of the record's null fields, in column order."""
    return [name for name in RATE_FIELDS if getattr(record, name) is None]


def validate_row(record: RateRecord) -> bool:
    """True if the record has a value for every field."""
    return not missing_fields(record)
