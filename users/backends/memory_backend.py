import copy
from typing import Any, Dict

from .base import UserIndexBackend


class InMemoryBackend(UserIndexBackend):
    def __init__(self, index: str = "users"):
        self.index = index
        self.indices: Dict[str, Dict[str, Dict[str, Any]]] = {}

    @property
    def docs(self) -> Dict[str, Dict[str, Any]]:
        return self.indices.setdefault(self.index, {})

    # Index lifecycle
    def ensure_indices(self) -> bool:
        self.create_index_if_not_exists(self.index)
        return True

    def create_index_if_not_exists(self, name: str) -> None:
        self.indices.setdefault(name, {})

    # Documents
    def add_or_update(self, doc: Dict[str, Any]) -> bool:
        self.docs[doc["key"]] = copy.deepcopy(doc)
        return True

    def get(self, key):
        doc = self.docs.get(key)
        return copy.deepcopy(doc) if doc is not None else None

    def get_all(self):
        return [copy.deepcopy(d) for d in self.docs.values()]

    def remove(self, key: str) -> bool:
        return self.docs.pop(key, None) is not None

    def remove_all(self):
        deleted = len(self.docs)
        self.docs.clear()
        return deleted
