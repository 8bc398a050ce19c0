"""Named collection of saved sheets, synchronized with a key-value store.

The whole mapping is stored as one JSON object under a single key:

    {"<name>": {"goal": ..., "currentBalance": ..., "incomes": [...], "outgoings": [...]}}

Persistence failures never propagate: a failed load gives an empty
registry and a failed write leaves the in-memory mapping updated.
"""

import json
import logging

from goalsheet.domain.models import SheetName
from goalsheet.domain.sheet import SavingsSheet, SheetSnapshot
from goalsheet.store.kv import KeyValueStore

logger = logging.getLogger(__name__)

STORAGE_KEY = "savedSheets"
EMPTY_NAME_WARNING = "Please enter a sheet name."


class SheetRegistry:
    """Saved sheets keyed by name."""

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store
        self._sheets: dict[SheetName, SheetSnapshot] = {}
        self._current: SheetName | None = None

    @property
    def current(self) -> SheetName | None:
        """Name of the selected sheet, if any."""
        return self._current

    def load(self) -> None:
        """Replace the in-memory mapping with the stored one.

        Absent or unreadable data gives an empty mapping.
        """
        self._sheets = {}

        try:
            raw = self.store.get(STORAGE_KEY)
        except Exception as e:
            logger.warning("Could not read saved sheets: %s", e)
            return

        if raw is None:
            logger.debug("No saved sheets found")
            return

        try:
            data = json.loads(raw)
        except (TypeError, ValueError, RecursionError) as e:
            logger.warning("Saved sheets are corrupt, starting empty: %s", e)
            return

        if not isinstance(data, dict):
            logger.warning("Saved sheets have unexpected type %s, starting empty", type(data).__name__)
            return

        for name, entry in data.items():
            if not isinstance(entry, dict):
                logger.warning("Skipping malformed saved sheet %r", name)
                continue
            self._sheets[SheetName(name)] = SheetSnapshot.from_dict(entry)

        logger.debug("Loaded %d saved sheet(s)", len(self._sheets))

    def save(self, sheet: SavingsSheet) -> str | None:
        """Save the working sheet under its name and select it.

        Args:
            sheet: Sheet to save. Its name is used verbatim as the key.

        Returns:
            Warning message if the name is blank (nothing is saved),
            otherwise None.
        """
        if not sheet.name.strip():
            return EMPTY_NAME_WARNING

        self._sheets[sheet.name] = sheet.snapshot()
        self._current = sheet.name
        self._write()
        return None

    def open(self, name: str, sheet: SavingsSheet) -> None:
        """Select a saved sheet and load it into the working sheet.

        Args:
            name: Name to select. An empty name clears the selection.
            sheet: Working sheet to load into. It is reset to blank when the
                name is empty or unknown.
        """
        snapshot = self._sheets.get(SheetName(name)) if name else None
        sheet.load_from(SheetName(name), snapshot)
        self._current = SheetName(name) if snapshot is not None else None

    def list_names(self) -> list[SheetName]:
        return list(self._sheets)

    def get(self, name: str) -> SheetSnapshot | None:
        """Look up a saved sheet.

        Returns:
            A copy of the saved snapshot, or None if there is no such sheet.
        """
        snapshot = self._sheets.get(SheetName(name))
        return snapshot.copy() if snapshot is not None else None

    def to_json(self) -> str:
        """Serialize the full mapping in its stored form."""
        return json.dumps({name: snapshot.to_dict() for name, snapshot in self._sheets.items()})

    def _write(self) -> None:
        try:
            self.store.set(STORAGE_KEY, self.to_json())
        except Exception as e:
            logger.warning("Could not write saved sheets: %s", e)
