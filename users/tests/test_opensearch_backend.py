from types import SimpleNamespace
from unittest import mock

import pytest
from opensearchpy.exceptions import ConnectionError, NotFoundError, RequestError, TransportError

from users.backends.opensearch_backend import OpenSearchBackend


@pytest.fixture
def client():
    return mock.MagicMock()


@pytest.fixture
def backend(client, settings):
    settings.OPENSEARCH = {**settings.OPENSEARCH, "INDEX": "people"}
    return OpenSearchBackend(client=client)


class TestIndexLifecycle:
    def test_creates_missing_index(self, backend, client):
        client.indices.exists.return_value = False

        backend.create_index_if_not_exists("people")

        client.indices.create.assert_called_once_with(index="people")

    def test_existing_index_is_left_alone(self, backend, client):
        client.indices.exists.return_value = True

        backend.create_index_if_not_exists("people")

        client.indices.create.assert_not_called()

    def test_concurrent_create_is_tolerated(self, backend, client):
        client.indices.exists.return_value = False
        client.indices.create.side_effect = RequestError(400, "resource_already_exists_exception", {})

        backend.create_index_if_not_exists("people")

    def test_other_create_errors_propagate(self, backend, client):
        client.indices.exists.return_value = False
        client.indices.create.side_effect = RequestError(400, "invalid_index_name_exception", {})

        with pytest.raises(RequestError):
            backend.create_index_if_not_exists("BAD")

    def test_ensure_indices_uses_configured_collection(self, backend, client):
        client.indices.exists.return_value = False

        backend.ensure_indices()

        client.indices.create.assert_called_once_with(index="people")

    def test_ensure_indices_reports_unreachable_cluster(self, backend, client):
        client.indices.exists.side_effect = ConnectionError("N/A", "connection refused", Exception())

        assert backend.ensure_indices() is False

    def test_ensure_indices_reports_success(self, backend, client):
        client.indices.exists.return_value = True
        assert backend.ensure_indices() is True

    def test_client_built_from_settings(self, settings, monkeypatch):
        settings.OPENSEARCH = {**settings.OPENSEARCH, "HOSTS": ["http://search.internal:9200"], "USER": "", "RETRIES": 5, "TIMEOUT": 3}
        built = mock.MagicMock()
        monkeypatch.setattr("opensearchpy.OpenSearch", built)

        OpenSearchBackend()

        kwargs = built.call_args.kwargs
        assert kwargs["hosts"] == ["http://search.internal:9200"]
        assert kwargs["max_retries"] == 5
        assert kwargs["timeout"] == 3
        assert kwargs["http_auth"] is None


class TestDocuments:
    def test_upsert_indexes_under_key(self, backend, client):
        client.index.return_value = {"result": "created"}
        doc = {"key": "u1", "name": "Alice"}

        assert backend.add_or_update(doc) is True
        client.index.assert_called_once_with(index="people", id="u1", body=doc, refresh="wait_for")

    def test_upsert_of_existing_key(self, backend, client):
        client.index.return_value = {"result": "updated"}
        assert backend.add_or_update({"key": "u1"}) is True

    def test_upsert_failure(self, backend, client):
        client.index.side_effect = ConnectionError("N/A", "connection refused", Exception())
        assert backend.add_or_update({"key": "u1"}) is False

    def test_get_returns_source(self, backend, client):
        client.get.return_value = {"_id": "u1", "found": True, "_source": {"key": "u1", "name": "Alice"}}

        assert backend.get("u1") == {"key": "u1", "name": "Alice"}
        client.get.assert_called_once_with(index="people", id="u1")

    def test_get_missing(self, backend, client):
        client.get.side_effect = NotFoundError(404, "not_found", {"found": False})
        assert backend.get("nope") is None

    def test_get_failure_reads_as_missing(self, backend, client):
        client.get.side_effect = TransportError(503, "unavailable", {})
        assert backend.get("u1") is None

    def test_get_all_scans_whole_collection(self, backend, client):
        hits = [{"_id": "a", "_source": {"key": "a"}}, {"_id": "b", "_source": {"key": "b"}}]
        scan = mock.Mock(return_value=iter(hits))
        backend._helpers = SimpleNamespace(scan=scan)

        assert backend.get_all() == [{"key": "a"}, {"key": "b"}]
        scan.assert_called_once_with(client, query={"query": {"match_all": {}}}, index="people")

    def test_get_all_failure(self, backend, client):
        backend._helpers = SimpleNamespace(scan=mock.Mock(side_effect=TransportError(500, "search_phase_execution_exception", {})))
        assert backend.get_all() is None

    def test_remove(self, backend, client):
        client.delete.return_value = {"result": "deleted"}

        assert backend.remove("u1") is True
        client.delete.assert_called_once_with(index="people", id="u1", refresh="wait_for")

    def test_remove_missing_is_failure(self, backend, client):
        client.delete.side_effect = NotFoundError(404, "not_found", {"result": "not_found"})
        assert backend.remove("u1") is False

    def test_remove_all_returns_deleted_count(self, backend, client):
        client.delete_by_query.return_value = {"deleted": 3, "failures": []}

        assert backend.remove_all() == 3
        kwargs = client.delete_by_query.call_args.kwargs
        assert kwargs["index"] == "people"
        assert kwargs["body"] == {"query": {"match_all": {}}}
        assert kwargs["refresh"] is True

    def test_remove_all_failure(self, backend, client):
        client.delete_by_query.side_effect = ConnectionError("N/A", "timeout", Exception())
        assert backend.remove_all() is None

    def test_remove_all_with_failures_is_failure(self, backend, client):
        client.delete_by_query.return_value = {"deleted": 2, "version_conflicts": 0, "failures": [{"index": "people", "id": "u3", "status": 500}]}
        assert backend.remove_all() is None

    def test_remove_all_with_version_conflicts_is_failure(self, backend, client):
        client.delete_by_query.return_value = {"deleted": 2, "version_conflicts": 1, "failures": []}
        assert backend.remove_all() is None
