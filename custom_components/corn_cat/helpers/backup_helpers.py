"""Export/import utilities for the Corn Cat integration.

Export serializes the save document as indented JSON. Import parses a
user-supplied JSON string, checks it is well formed, and runs the same
reconciliation used when loading from storage, so an imported document
always satisfies the current schema.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from homeassistant.exceptions import HomeAssistantError

from .. import const
from ..store import CornCatStore

if TYPE_CHECKING:
    from ..type_defs import SaveFileData

EXPORT_FILE_NAME = "corn-cat-save.json"


class InvalidImportError(HomeAssistantError):
    """Raised when an import payload is not a JSON object."""


def export_save_file(data: SaveFileData) -> str:
    """Serialize a save document to indented JSON.

    Args:
        data: Save document to export.

    Returns:
        JSON string with two-space indentation.
    """
    return json.dumps(data, indent=2, ensure_ascii=False)


def parse_import(
    json_str: str, creature_name: str = const.DEFAULT_CREATURE_NAME
) -> SaveFileData:
    """Parse and reconcile an imported save document.

    Args:
        json_str: Raw JSON text supplied by the user.
        creature_name: Creature name used if the payload carries none.

    Returns:
        Reconciled save document, ready to replace the current state.

    Raises:
        InvalidImportError: Malformed JSON or a root that is not an object.
    """
    try:
        parsed: Any = json.loads(json_str)
    except (json.JSONDecodeError, TypeError) as err:
        const.LOGGER.warning("WARNING: Import rejected, malformed JSON: %s", err)
        raise InvalidImportError(const.ERROR_INVALID_IMPORT.format(err)) from err

    if not isinstance(parsed, dict):
        const.LOGGER.warning(
            "WARNING: Import rejected, root is %s instead of an object",
            type(parsed).__name__,
        )
        raise InvalidImportError(
            const.ERROR_INVALID_IMPORT.format("root must be a JSON object")
        )

    return CornCatStore.reconcile(parsed, creature_name)
