import copy
from types import SimpleNamespace

import pytest

from entando_install.errors import ClusterWriteFailure, InstallAborted
from entando_install.records import ResourceRef


class FakeGateway:
    """In-memory cluster keyed by (kind, namespace, name)."""

    def __init__(self, namespaces=()):
        self.namespaces = set(namespaces)
        self.objects = {}
        self.calls = []
        self.fail_create = {}
        self.fail_patch = {}

    @staticmethod
    def _key(record):
        meta = record["metadata"]
        return record["kind"], meta.get("namespace"), meta["name"]

    def read_namespace(self, name):
        self.calls.append(("read_namespace", name))
        return name if name in self.namespaces else None

    def create_namespace(self, name):
        self.calls.append(("create_namespace", name))
        self.namespaces.add(name)

    def read_resource(self, record):
        self.calls.append(("read", record["metadata"]["name"]))
        return self.objects.get(self._key(record))

    def create_resource(self, record):
        name = record["metadata"]["name"]
        self.calls.append(("create", name))
        if name in self.fail_create:
            raise ClusterWriteFailure(ResourceRef.of(record), "creating", self.fail_create[name], "rejected")
        self.objects[self._key(record)] = copy.deepcopy(record)

    def patch_resource(self, record):
        name = record["metadata"]["name"]
        self.calls.append(("patch", name))
        if name in self.fail_patch:
            raise ClusterWriteFailure(ResourceRef.of(record), "patching", self.fail_patch[name], "rejected")
        self.objects[self._key(record)] = copy.deepcopy(record)

    def list_resources(self, api_version, kind, namespace):
        self.calls.append(("list", kind, namespace))
        return [
            SimpleNamespace(metadata=SimpleNamespace(name=name))
            for (k, ns, name) in self.objects
            if k == kind and ns == namespace
        ]

    def writes(self):
        return [c for c in self.calls if c[0] in ("create", "patch")]


class ScriptedPrompter:
    """Answers prompts from a fixed script, in order."""

    def __init__(self, *answers):
        self.answers = list(answers)
        self.messages = []

    def _next(self, message):
        self.messages.append(message)
        assert self.answers, f"unexpected prompt: {message}"
        return self.answers.pop(0)

    def select(self, message, choices):
        answer = self._next(message)
        values = [c[1] if isinstance(c, tuple) else c for c in choices]
        assert answer in values, f"{answer!r} not offered for {message!r}: {values}"
        return answer

    def confirm(self, message):
        return bool(self._next(message))

    def confirm_or_abort(self, message):
        if not self.confirm(message):
            raise InstallAborted()

    def text(self, message):
        return self._next(message)


def make_record(kind="ConfigMap", name="cfg", namespace=None, api_version="v1", **extra):
    meta = {"name": name}
    if namespace:
        meta["namespace"] = namespace
    record = {"apiVersion": api_version, "kind": kind, "metadata": meta}
    record.update(extra)
    return record


@pytest.fixture
def gateway():
    return FakeGateway(namespaces={"entando"})


@pytest.fixture
def records():
    return [
        make_record("ServiceAccount", "entando-operator"),
        make_record("ConfigMap", "entando-docker-image-info", data={"a": "b"}),
        make_record("Role", "entando-operator", api_version="rbac.authorization.k8s.io/v1"),
    ]
