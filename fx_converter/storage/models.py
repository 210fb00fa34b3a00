"""
Data models for storage layer.

Defines the persisted conversion record.
"""

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict


@dataclass(frozen=True)
class ConversionRecord:
    """Immutable record of one completed conversion.

    Amounts are kept as 2-decimal strings exactly as they were printed,
    so the log reads the same as the session that produced it.
    """
    date: str
    amount: str
    base_currency: str
    target_currency: str
    converted_amount: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConversionRecord":
        """Build a record from one entry of the persisted log.

        Raises:
            ValueError: If fields are missing, unknown, or not strings
        """
        expected = {f.name for f in fields(cls)}
        missing = expected - set(data)
        if missing:
            raise ValueError(f"Missing record fields: {sorted(missing)}")
        unknown = set(data) - expected
        if unknown:
            raise ValueError(f"Unknown record fields: {sorted(unknown)}")
        for name in expected:
            if not isinstance(data[name], str):
                raise ValueError(f"Record field '{name}' must be a string")
        return cls(**data)
