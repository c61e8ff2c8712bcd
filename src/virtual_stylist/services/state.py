"""Top-level state shared by generation and editing."""

from dataclasses import dataclass, field
from uuid import UUID

from virtual_stylist.domain.edits import EditSession
from virtual_stylist.domain.outfits import SourceItem, initial_records
from virtual_stylist.services.registry import ResultRegistry


@dataclass
class StylistState:
    """Owns the registry, the uploaded item and the open edit session."""

    registry: ResultRegistry = field(default_factory=ResultRegistry)
    source: SourceItem | None = None
    edit_session: EditSession | None = None

    @property
    def source_id(self) -> UUID | None:
        return self.source.id if self.source else None

    def replace_source(self, source: SourceItem | None) -> None:
        """Swap the uploaded item and reset every outfit to idle."""
        self.source = source
        self.edit_session = None
        self.registry.reset_all(initial_records())
