"""In-memory store of per-style outfit records."""

from dataclasses import dataclass

from virtual_stylist.domain.outfits import STYLES, OutfitRecord, Style, initial_records


@dataclass
class ResultRegistry:
    """Single source of truth for the three outfit records."""

    _records: dict[Style, OutfitRecord]

    def __init__(self) -> None:
        self._records = initial_records()

    def get(self, style: Style) -> OutfitRecord:
        """Return the current record for a style."""
        return self._records[style]

    def set(self, style: Style, record: OutfitRecord) -> None:
        """Replace the record for a style."""
        if record.style is not style:
            raise ValueError(
                f"Record for {record.style.value} stored under {style.value}"
            )
        self._records[style] = record

    def reset_all(self, records: dict[Style, OutfitRecord]) -> None:
        """Replace every record at once."""
        if set(records) != set(STYLES):
            raise ValueError("Reset requires exactly one record per style")
        self._records = dict(records)

    def snapshot(self) -> list[OutfitRecord]:
        """Return all records in display order."""
        return [self._records[style] for style in STYLES]
