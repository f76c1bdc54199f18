"""
Seed Data Loader

Reads the bundled list of irregular verbs inserted into an empty store.
Entries may use either the legacy single-meaning layout (``meaning``,
``contextual_usage`` or ``contextualUsage``, ``examples``) or a ``meanings``
list.
"""

import json
from pathlib import Path
from typing import List, Optional, Union

from pydantic import ValidationError

from config.settings import settings
from core.schemas import VerbRecord
from services.verbs.legacy import row_to_record
from utils.exceptions import InvalidVerbDataError
from utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_SEED_PATH = Path(__file__).parent / "data" / "seed_verbs.json"


def resolve_seed_path(path: Optional[Union[str, Path]] = None) -> Path:
    """Explicit path, else SEED_DATA_PATH, else the bundled file."""
    if path:
        return Path(path)
    if settings.SEED_DATA_PATH:
        return Path(settings.SEED_DATA_PATH)
    return DEFAULT_SEED_PATH


def load_seed_verbs(path: Optional[Union[str, Path]] = None) -> List[VerbRecord]:
    """
    Load and validate the initial verb set.

    Args:
        path: JSON file holding a list of verb rows

    Returns:
        List[VerbRecord]: Records in file order

    Raises:
        InvalidVerbDataError: File missing, not a JSON list, or an entry is invalid
    """
    seed_path = resolve_seed_path(path)

    try:
        with open(seed_path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        raise InvalidVerbDataError(
            message=f"Seed file not found: {seed_path}",
            details={"path": str(seed_path)}
        )
    except ValueError as e:
        raise InvalidVerbDataError(
            message=f"Seed file is not valid JSON: {e}",
            details={"path": str(seed_path)}
        )

    if not isinstance(data, list):
        raise InvalidVerbDataError(
            message="Seed file must contain a JSON list",
            details={"path": str(seed_path)}
        )

    records = []
    for position, entry in enumerate(data):
        if not isinstance(entry, dict):
            raise InvalidVerbDataError(
                message=f"Seed entry {position} is not an object",
                details={"position": position}
            )
        try:
            records.append(row_to_record(entry))
        except ValidationError as e:
            raise InvalidVerbDataError(
                message=f"Seed entry {position} is invalid",
                verb_id=entry.get("id"),
                details={"position": position, "errors": e.error_count()}
            )

    logger.debug(f"Loaded {len(records)} seed verbs from {seed_path}")
    return records
