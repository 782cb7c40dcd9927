from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Mapping

from pydantic import BaseModel, TypeAdapter, ValidationError

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class CategoryRef:
    id: str
    name: str


# lowercased category name -> ref; treated as a read-only snapshot
CategoryLookup = Mapping[str, CategoryRef]


class CategoryFileError(ValueError):
    pass


class CategoryRecord(BaseModel):
    id: int | str
    name: str


_RECORDS = TypeAdapter(list[CategoryRecord])


def build_category_lookup(refs: Iterable[CategoryRef]) -> dict[str, CategoryRef]:
    """Index categories by lowercased name. The first ref wins on duplicate names."""
    lookup: dict[str, CategoryRef] = {}
    for ref in refs:
        key = ref.name.strip().lower()
        if key and key not in lookup:
            lookup[key] = ref
    return lookup


def refs_from_records(records: Iterable[CategoryRecord]) -> list[CategoryRef]:
    return [CategoryRef(id=str(r.id), name=r.name) for r in records]


def load_category_lookup(path: str | Path) -> dict[str, CategoryRef]:
    p = Path(path)
    try:
        raw = json.loads(p.read_text(encoding="utf-8"))
        records = _RECORDS.validate_python(raw)
    except OSError as exc:
        raise CategoryFileError(f"cannot read category file {p}: {exc}") from exc
    except (json.JSONDecodeError, ValidationError) as exc:
        raise CategoryFileError(f"malformed category file {p}: {exc}") from exc

    lookup = build_category_lookup(refs_from_records(records))
    log.info("categories_loaded", extra={"path": str(p), "categories": len(lookup)})
    return lookup
