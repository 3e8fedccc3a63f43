import logging
from typing import Any, Dict, List, Optional

from kubernetes.client import ApiException
from kubernetes.dynamic.exceptions import ResourceNotFoundError

from entando_install.errors import ClusterError, ClusterWriteFailure
from entando_install.records import Record, ResourceRef

logger = logging.getLogger("entando_install.kube")

MERGE_PATCH = "application/merge-patch+json"


class ClusterGateway:
    """Reads and writes single resources against the live cluster.

    Not-found is reported as ``None``; every other API error is raised as a
    ``ClusterError`` naming the resource involved.
    """

    def __init__(self, apis: Dict[str, Any]):
        self.core = apis["core"]
        self.dyn = apis["dyn"]

    def read_namespace(self, name: str):
        try:
            return self.core.read_namespace(name)
        except ApiException as e:
            if e.status == 404:
                return None
            raise ClusterError(f"namespace '{name}'", "reading", e.status, e.reason)

    def create_namespace(self, name: str) -> None:
        try:
            self.core.create_namespace(body={"metadata": {"name": name}})
        except ApiException as e:
            raise ClusterWriteFailure(f"namespace '{name}'", "creating", e.status, e.reason)

    def read_resource(self, record: Record):
        ref = ResourceRef.of(record)
        try:
            api = self._api(ref)
        except ResourceNotFoundError:
            # the kind itself is unknown to the cluster, e.g. its CRD is missing
            return None
        try:
            return api.get(**self._locator(api, ref))
        except ApiException as e:
            if e.status == 404:
                return None
            raise ClusterError(ref, "reading", e.status, e.reason)

    def create_resource(self, record: Record) -> None:
        ref = ResourceRef.of(record)
        api = self._writable_api(ref, "creating")
        kwargs = {"body": record}
        if api.namespaced:
            kwargs["namespace"] = ref.namespace
        try:
            api.create(**kwargs)
        except ApiException as e:
            raise ClusterWriteFailure(ref, "creating", e.status, e.reason)

    def patch_resource(self, record: Record) -> None:
        ref = ResourceRef.of(record)
        api = self._writable_api(ref, "patching")
        try:
            api.patch(body=record, content_type=MERGE_PATCH, **self._locator(api, ref))
        except ApiException as e:
            raise ClusterWriteFailure(ref, "patching", e.status, e.reason)

    def list_resources(self, api_version: str, kind: str, namespace: str) -> List[Any]:
        try:
            api = self.dyn.resources.get(api_version=api_version, kind=kind)
        except ResourceNotFoundError:
            return []
        try:
            return list(api.get(namespace=namespace).items)
        except ApiException as e:
            raise ClusterError(f"{kind} list in namespace '{namespace}'", "listing", e.status, e.reason)

    def _api(self, ref: ResourceRef):
        return self.dyn.resources.get(api_version=ref.api_version, kind=ref.kind)

    def _writable_api(self, ref: ResourceRef, action: str):
        try:
            return self._api(ref)
        except ResourceNotFoundError as e:
            raise ClusterWriteFailure(ref, action, reason=str(e))

    @staticmethod
    def _locator(api, ref: ResourceRef) -> Dict[str, Optional[str]]:
        if api.namespaced:
            return {"name": ref.name, "namespace": ref.namespace}
        return {"name": ref.name}
