from unittest.mock import MagicMock, patch

import pytest
import requests

from entando_install import fetch
from entando_install.errors import RemoteFetchFailure


def _response(text="", payload=None, status_error=None):
    resp = MagicMock()
    resp.text = text
    resp.json.return_value = payload
    if status_error:
        resp.raise_for_status.side_effect = status_error
    return resp


@patch("entando_install.fetch.requests.get")
def test_fetch_text(mock_get):
    mock_get.return_value = _response(text="kind: ConfigMap\n")
    assert fetch.fetch_text("https://example.com/a.yaml", "a.yaml") == "kind: ConfigMap\n"
    mock_get.assert_called_once_with("https://example.com/a.yaml", timeout=fetch.HTTP_TIMEOUT)


@patch("entando_install.fetch.requests.get")
def test_fetch_text_http_error_names_the_file(mock_get):
    mock_get.return_value = _response(status_error=requests.HTTPError("404 Client Error"))
    with pytest.raises(RemoteFetchFailure) as exc:
        fetch.fetch_text("https://example.com/a.yaml", "namespace-resources.yaml")
    assert exc.value.name == "namespace-resources.yaml"
    assert "namespace-resources.yaml" in str(exc.value)


@patch("entando_install.fetch.requests.get")
def test_fetch_text_connection_error(mock_get):
    mock_get.side_effect = requests.ConnectionError("boom")
    with pytest.raises(RemoteFetchFailure):
        fetch.fetch_text("https://example.com/a.yaml", "a.yaml")


@patch("entando_install.fetch.requests.get")
def test_fetch_tags_keeps_order(mock_get):
    mock_get.return_value = _response(payload=[{"name": "v7.3.0", "commit": {}}, {"name": "v7.2.2"}])
    assert fetch.fetch_tags("https://example.com/tags") == ["v7.3.0", "v7.2.2"]


@patch("entando_install.fetch.requests.get")
def test_fetch_tags_bad_payload(mock_get):
    resp = _response()
    resp.json.side_effect = ValueError("not json")
    mock_get.return_value = resp
    with pytest.raises(RemoteFetchFailure, match="tags"):
        fetch.fetch_tags("https://example.com/tags")
