from __future__ import annotations

from functools import lru_cache

from postquery.common.config import settings
from postquery.query.categories import CategoryLookup, load_category_lookup


@lru_cache(maxsize=8)
def _category_file(path: str) -> CategoryLookup:
    return load_category_lookup(path)


def get_categories() -> CategoryLookup:
    if not settings.categories_path:
        return {}
    return _category_file(settings.categories_path)
