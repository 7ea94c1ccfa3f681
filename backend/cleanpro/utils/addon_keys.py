import re
from typing import Iterable, List


_WHITESPACE = re.compile(r"\s+")
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def addon_key(raw: str) -> str:
    """Return the add-on key for a surcharge name or a requested add-on.

    Rules:
    - lowercase
    - drop every whitespace character

    ``"Pet Hair Cleanup"`` becomes ``"pethaircleanup"``.
    """
    if not raw:
        return ""
    return _WHITESPACE.sub("", str(raw).lower())


def unique_addons(raw_values: Iterable[str] | None) -> List[str]:
    """Requested add-ons as the caller spelled them, trimmed.

    Blanks are dropped and repeats are detected on :func:`addon_key`, so
    ``["deepCleaning", "Deep Cleaning"]`` keeps only ``"deepCleaning"``.
    """
    seen: set[str] = set()
    values: List[str] = []
    for raw in raw_values or []:
        key = addon_key(raw)
        if not key or key in seen:
            continue
        seen.add(key)
        values.append(str(raw).strip())
    return values


def unique_addon_keys(raw_keys: Iterable[str] | None) -> List[str]:
    """Normalized keys of :func:`unique_addons`."""
    return [addon_key(raw) for raw in unique_addons(raw_keys)]


def decamelize(raw: str) -> str:
    """Turn ``"deepCleaning"`` into ``"Deep Cleaning"`` for display."""
    if not raw:
        return ""
    spaced = _CAMEL_BOUNDARY.sub(" ", str(raw).strip())
    return spaced[:1].upper() + spaced[1:]
