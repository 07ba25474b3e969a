# pysem/interfaces/utilities.py

"""
Helpers shared by the interfaces and the engine.

- get_value: nested get-or-default lookup used everywhere in the cascade
- is_number: numeric leaf test (python and numpy scalars, never bool)
- category_key / param_key: string keys of allocation categories
- load_document: read a YAML or JSON document into plain dicts

Design notes:
- Lookups never raise; a missing key anywhere in the path yields the default
- Documents ending in .json go through json; everything else through yaml.safe_load
"""

import json
import numbers
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Union

import yaml


# =============================================================================
# Lookups
# =============================================================================

def get_value(obj: Any, keys: Iterable[Any], default: Any = 0) -> Any:
    """
    Walk a nested mapping along ``keys`` and return the value found.

    Parameters
    ----------
    obj : Mapping
        Nested mapping to search.
    keys : iterable
        Successive keys (e.g. ``[sector, subsector, tech, fuel]``).
    default : any, optional
        Returned when any key is missing or the value is None (default: 0).

    Returns
    -------
    any
        The nested value, or ``default``.

    Examples
    --------
    >>> get_value({'Industry': {'Steel': 12.0}}, ['Industry', 'Steel'])
    12.0
    >>> get_value({'Industry': {}}, ['Industry', 'Steel', 'EAF'], 0)
    0
    """
    current = obj
    for key in keys:
        if isinstance(current, Mapping) and key in current:
            current = current[key]
        else:
            return default
    return default if current is None else current


def is_number(value: Any) -> bool:
    """True for real numeric scalars, including numpy ones; False for bool."""
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def get_number(obj: Any, keys: Iterable[Any], default: float = 0.0) -> float:
    """Like get_value, but only accept numeric leaves."""
    value = get_value(obj, keys, default)
    if not is_number(value):
        return default
    return float(value)


def add_to(target: Dict[Any, float], key: Any, value: float) -> None:
    """Accumulate ``value`` into ``target[key]``."""
    target[key] = target.get(key, 0.0) + value


# =============================================================================
# Category keys
# =============================================================================

def category_key(category_type: str, *parts: str) -> str:
    """
    Build the allocation category identifier.

    >>> category_key('Demand', 'Industry', 'Steel')
    'Demand|Industry|Steel'
    >>> category_key('Power')
    'Power|Power'
    """
    if not parts:
        parts = (category_type,)
    return "|".join((category_type,) + tuple(parts))


def param_key(category: str, tech: str) -> str:
    """Key of one technology in ``techBehaviorsAndParams``."""
    return f"{category}|{tech}"


def subsector_key(sector: str, subsector: str) -> str:
    """Key of one subsector in ``activityGrowthFactors``."""
    return f"{sector}|{subsector}"


# =============================================================================
# Documents
# =============================================================================

def load_document(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load a YAML or JSON document.

    Parameters
    ----------
    path : str or Path
        Path to a ``.yaml``, ``.yml`` or ``.json`` file.

    Returns
    -------
    dict
        Parsed document (empty dict for an empty file).

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    ValueError
        If the document is not a mapping.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Document not found: {path}")

    with open(path, "r") as f:
        if path.suffix.lower() == ".json":
            data = json.load(f)
        else:
            data = yaml.safe_load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path.name} must contain a mapping at top level")
    return data
