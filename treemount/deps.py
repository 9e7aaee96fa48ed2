from __future__ import annotations

from functools import lru_cache

from .config import settings
from .services.tree import Tree
from .services.tree_stack import build_tree


@lru_cache(maxsize=1)
def get_tree() -> Tree:
    return build_tree(settings)
