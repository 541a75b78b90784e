from pathlib import Path
from typing import Optional, Union

from planner.utilities.config import DATA_DIR

# Centralized paths for data files (single source of truth)
CATALOG_FILE = DATA_DIR / 'catalog.json'
SHOPPING_LISTS_FILE = DATA_DIR / 'shopping_lists.json'
PLANNER_FILE = DATA_DIR / 'planner.json'


def data_files(data_dir: Optional[Union[str, Path]] = None):
    """Return (catalog, shopping lists, planner) paths, rooted at data_dir if given."""
    if data_dir is None:
        return CATALOG_FILE, SHOPPING_LISTS_FILE, PLANNER_FILE
    root = Path(data_dir).resolve()
    return root / 'catalog.json', root / 'shopping_lists.json', root / 'planner.json'

__all__ = ['DATA_DIR', 'CATALOG_FILE', 'SHOPPING_LISTS_FILE', 'PLANNER_FILE', 'data_files']
