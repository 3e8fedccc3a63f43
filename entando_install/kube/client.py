from typing import Any, Dict, List, Optional, Tuple

from kubernetes import client, config, dynamic
from kubernetes.config.config_exception import ConfigException

_cached_clients: Dict[Optional[str], Dict[str, Any]] = {}


def list_kube_contexts() -> Tuple[List[str], Optional[str]]:
    try:
        contexts, active = config.list_kube_config_contexts()
    except ConfigException:
        return [], None
    names = [c["name"] for c in contexts or []]
    return names, (active or {}).get("name")


def get_k8s_api_clients(context: Optional[str] = None) -> Dict[str, Any]:
    if context in _cached_clients:
        return _cached_clients[context]
    try:
        config.load_kube_config(context=context)
    except ConfigException:
        config.load_incluster_config()
    api_client = client.ApiClient()
    _cached_clients[context] = {
        "core": client.CoreV1Api(api_client),
        "dyn": dynamic.DynamicClient(api_client),
        "api": api_client,
    }
    return _cached_clients[context]


def api_host(apis: Dict[str, Any]) -> str:
    return apis["api"].configuration.host
