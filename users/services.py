import logging
import threading

from django.conf import settings

log = logging.getLogger(__name__)

_backend = None
_ensured = False
_lock = threading.Lock()


def get_backend():
    # env 기반 토글: ENABLED=false면 In-Memory
    if not settings.OPENSEARCH.get("ENABLED", False):
        from .backends.memory_backend import InMemoryBackend

        log.info("Using in-memory user index backend")
        return InMemoryBackend(index=settings.OPENSEARCH.get("INDEX", "users"))

    from .backends.opensearch_backend import OpenSearchBackend

    log.info("Using OpenSearch user index backend at %s", ", ".join(settings.OPENSEARCH["HOSTS"]))
    return OpenSearchBackend()


def backend():
    """Process-wide backend; the default collection is ensured until that succeeds once."""
    global _backend, _ensured
    if _backend is None or not _ensured:
        with _lock:
            if _backend is None:
                _backend = get_backend()
            if not _ensured:
                _ensured = _backend.ensure_indices()
    return _backend


# Convenience wrappers
def create_index(name):
    backend().create_index_if_not_exists(name)


def add_or_update(doc):
    return backend().add_or_update(doc)


def get_user(key):
    return backend().get(key)


def get_all_users():
    return backend().get_all()


def delete_user(key):
    return backend().remove(key)


def delete_all_users():
    return backend().remove_all()
