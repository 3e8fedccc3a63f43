from .client import api_host, get_k8s_api_clients, list_kube_contexts
from .gateway import ClusterGateway

__all__ = [
    "api_host",
    "get_k8s_api_clients",
    "list_kube_contexts",
    "ClusterGateway",
]
