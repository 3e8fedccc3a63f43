import logging
from typing import List

import requests
from jsonpath_ng import parse as jp_parse

from entando_install.config import HTTP_TIMEOUT
from entando_install.errors import RemoteFetchFailure

logger = logging.getLogger("entando_install.fetch")

_TAG_NAMES = jp_parse("$[*].name")


def fetch_text(url: str, name: str, timeout: int = HTTP_TIMEOUT) -> str:
    logger.debug("GET %s", url)
    try:
        resp = requests.get(url, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as e:
        raise RemoteFetchFailure(name, url, str(e)) from e
    return resp.text


def fetch_tags(url: str, timeout: int = HTTP_TIMEOUT) -> List[str]:
    logger.debug("GET %s", url)
    try:
        resp = requests.get(url, timeout=timeout)
        resp.raise_for_status()
        payload = resp.json()
    except (requests.RequestException, ValueError) as e:
        raise RemoteFetchFailure("Entando tags", url, str(e)) from e
    return [str(m.value) for m in _TAG_NAMES.find(payload)]
