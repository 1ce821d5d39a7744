from typing import Any, Dict, List, Optional


class UserIndexBackend:
    """Search engine operations the user gateway delegates to.

    Every method reports failure through its return value (False or None);
    client exceptions do not cross this boundary.
    """

    # Index lifecycle
    def ensure_indices(self) -> bool:
        """Create the default collection if it does not exist; False when the engine could not be reached."""
        ...

    def create_index_if_not_exists(self, name: str) -> None:
        """Create collection ``name`` unless it already exists."""
        ...

    # Documents
    def add_or_update(self, doc: Dict[str, Any]) -> bool:
        """Upsert ``doc`` under ``doc["key"]``; True on success."""
        ...

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        """Stored document for ``key``, or None when absent or on failure."""
        ...

    def get_all(self) -> Optional[List[Dict[str, Any]]]:
        """Every document of the default collection, or None on failure."""
        ...

    def remove(self, key: str) -> bool:
        """Delete the document stored under ``key``; True on success."""
        ...

    def remove_all(self) -> Optional[int]:
        """Delete every document of the default collection; number deleted, or None on failure."""
        ...
