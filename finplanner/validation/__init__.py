"""Record validation package."""

from finplanner.validation.validator import RecordValidator

__all__ = ["RecordValidator"]
