import logging
from typing import Any, Dict, List, Optional

from django.conf import settings

from .base import UserIndexBackend

log = logging.getLogger(__name__)


class OpenSearchBackend(UserIndexBackend):
    def __init__(self, client=None):
        from opensearchpy import OpenSearch, exceptions, helpers  # import 지연

        self._helpers = helpers
        self._errors = exceptions

        conf = settings.OPENSEARCH
        if client is None:
            auth = (conf["USER"], conf["PASSWORD"]) if conf["USER"] else None
            client = OpenSearch(
                hosts=conf["HOSTS"],
                http_auth=auth,
                timeout=conf["TIMEOUT"],
                verify_certs=conf["VERIFY_CERTS"],
                ssl_show_warn=conf["VERIFY_CERTS"],
                max_retries=conf["RETRIES"],
            )
        self.client = client
        self.index = conf["INDEX"]

    # Index lifecycle
    def ensure_indices(self) -> bool:
        try:
            self.create_index_if_not_exists(self.index)
        except self._errors.OpenSearchException:
            log.warning("Could not ensure index %s; will retry on next use", self.index, exc_info=True)
            return False
        return True

    def create_index_if_not_exists(self, name: str) -> None:
        if self.client.indices.exists(index=name):
            return
        try:
            self.client.indices.create(index=name)
        except self._errors.RequestError as e:
            # another worker created it between exists() and create()
            if e.error != "resource_already_exists_exception":
                raise
        else:
            log.info("Created index %s", name)

    # Documents
    def add_or_update(self, doc: Dict[str, Any]) -> bool:
        try:
            resp = self.client.index(index=self.index, id=doc["key"], body=doc, refresh="wait_for")
        except self._errors.OpenSearchException:
            log.warning("Upsert of %s into %s failed", doc.get("key"), self.index, exc_info=True)
            return False
        return resp.get("result") in ("created", "updated")

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        try:
            resp = self.client.get(index=self.index, id=key)
        except self._errors.NotFoundError:
            return None
        except self._errors.OpenSearchException:
            log.warning("Fetch of %s from %s failed", key, self.index, exc_info=True)
            return None
        return resp.get("_source") if resp.get("found") else None

    def get_all(self) -> Optional[List[Dict[str, Any]]]:
        query = {"query": {"match_all": {}}}
        try:
            return [hit["_source"] for hit in self._helpers.scan(self.client, query=query, index=self.index)]
        except self._errors.OpenSearchException:
            log.warning("Listing documents of %s failed", self.index, exc_info=True)
            return None

    def remove(self, key: str) -> bool:
        try:
            resp = self.client.delete(index=self.index, id=key, refresh="wait_for")
        except self._errors.NotFoundError:
            log.info("Delete of %s from %s: no such document", key, self.index)
            return False
        except self._errors.OpenSearchException:
            log.warning("Delete of %s from %s failed", key, self.index, exc_info=True)
            return False
        return resp.get("result") == "deleted"

    def remove_all(self) -> Optional[int]:
        body = {"query": {"match_all": {}}}
        try:
            resp = self.client.delete_by_query(index=self.index, body=body, refresh=True, conflicts="proceed")
        except self._errors.OpenSearchException:
            log.warning("Delete-all on %s failed", self.index, exc_info=True)
            return None
        if resp.get("failures") or resp.get("version_conflicts"):
            log.warning(
                "Delete-all on %s was partial: deleted=%s version_conflicts=%s failures=%s",
                self.index,
                resp.get("deleted"),
                resp.get("version_conflicts"),
                resp.get("failures"),
            )
            return None
        return int(resp.get("deleted", 0))
