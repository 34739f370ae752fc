"""
Reference dataset loader.

Loads the periodic table, nuclide ground states and physical constants that
ship inside physcalc.data. A data directory can be given to override any of
the bundled files.
"""

import csv
import importlib.resources as resources
import json
import logging
from pathlib import Path
from typing import Optional, Union

from physcalc.reference.models import ConstantRecord, Element, NuclideRecord

logger = logging.getLogger(__name__)

# Default dataset filenames
ELEMENTS_NAME = "periodic_table.json"
NUCLIDES_NAME = "ground_states.csv"
CONSTANTS_NAME = "constants.json"

PathLike = Union[str, Path]


def _resource_path(filename: str) -> Optional[Path]:
    """
    Resolve a packaged data file inside physcalc.data.

    Returns a filesystem path or None if the resource is unavailable.
    """
    try:
        resource = resources.files("physcalc.data").joinpath(filename)
    except ModuleNotFoundError:
        return None
    if resource.is_file():
        with resources.as_file(resource) as tmp_path:
            return Path(tmp_path)
    return None


def resolve_data_file(filename: str, data_dir: Optional[PathLike] = None) -> Path:
    """Find the best available path for a dataset file."""
    candidates = []
    if data_dir is not None:
        candidates.append(Path(data_dir) / filename)

    pkg_path = _resource_path(filename)
    if pkg_path:
        candidates.append(pkg_path)
    candidates.append(Path(__file__).resolve().parent.parent / "data" / filename)

    for candidate in candidates:
        if candidate.exists():
            return candidate

    # Default to first candidate for error reporting
    return candidates[0]


def _open(filename: str, path: Optional[PathLike], data_dir: Optional[PathLike]) -> Path:
    file_path = Path(path) if path else resolve_data_file(filename, data_dir)
    if not file_path.exists():
        raise FileNotFoundError(f"Reference dataset not found at {file_path}")
    logger.debug("Loading %s", file_path)
    return file_path


def load_elements(path: Optional[PathLike] = None, data_dir: Optional[PathLike] = None) -> list[Element]:
    """
    Load the periodic table.

    Args:
        path: Explicit JSON file. If None, the bundled table is used.
        data_dir: Directory searched before the bundled data.

    Returns:
        List of Element records

    Raises:
        FileNotFoundError: If the dataset doesn't exist
    """
    with open(_open(ELEMENTS_NAME, path, data_dir), encoding="utf-8") as f:
        data = json.load(f)
    return [Element(**item) for item in data]


def load_nuclides(path: Optional[PathLike] = None, data_dir: Optional[PathLike] = None) -> list[NuclideRecord]:
    """
    Load nuclide ground states from CSV.

    An empty half-life column marks a stable nuclide.
    """
    records = []
    with open(_open(NUCLIDES_NAME, path, data_dir), encoding="utf-8", newline="") as f:
        for row in csv.DictReader(f):
            row = {key: (value.strip() or None) for key, value in row.items()}
            records.append(NuclideRecord(**row))
    return records


def load_constants(path: Optional[PathLike] = None, data_dir: Optional[PathLike] = None) -> list[ConstantRecord]:
    """Load named physical constants."""
    with open(_open(CONSTANTS_NAME, path, data_dir), encoding="utf-8") as f:
        data = json.load(f)
    return [ConstantRecord(**item) for item in data]
