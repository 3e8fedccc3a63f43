"""Parsing of fetched manifests and construction of the generated ones.

Generated documents are built as plain dicts and serialized once with PyYAML.
Optional parts that the operator may want to enable by hand are written as
commented-out YAML next to the live documents.
"""

from typing import Any, Dict, List, Optional

import yaml

from entando_install.errors import ManifestError
from entando_install.records import Record

CLUSTER_RESOURCES_FILE = "cluster-resources.yaml"
OPERATOR_CONFIG_FILE = "entando-operator-config.yaml"
POSTGRES_SECRET_FILE = "postgres-secret.yaml"
REDEPLOY_FILE = "redeploy.yaml"
NAMESPACE_RESOURCES_FILE = "namespace-resources.yaml"

TLS_SECRET_KEY = "entando.tls.secret.name"
IMPOSE_LIMITS_KEY = "entando.k8s.operator.impose.limits"

OPERATOR_FIXED_DATA = {
    "entando.requires.filesystem.group.override": "true",
    "entando.ingress.class": "nginx",
}


def app_file(project: str) -> str:
    return f"entando-{project}-app.yaml"


def tls_cert_file(project: str) -> str:
    return f"{project}-tls-cert.yaml"


def tls_secret_name(project: str) -> str:
    return f"{project}-tls-secret"


def parse_all_documents(text: str, name: str = "manifest") -> List[Any]:
    try:
        return list(yaml.safe_load_all(text or ""))
    except yaml.YAMLError as e:
        raise ManifestError(name, str(e)) from e


def parse_one_document(text: str, name: str = "manifest") -> Optional[Record]:
    try:
        return yaml.safe_load(text or "")
    except yaml.YAMLError as e:
        raise ManifestError(name, str(e)) from e


def dump_document(doc: Any) -> str:
    return yaml.safe_dump(doc, sort_keys=False, default_flow_style=False)


def commented(text: str, indent: str = "") -> str:
    return "".join(f"#{indent}{line}\n" for line in text.splitlines())


def operator_config(sample_text: str, project: str, tls: bool, local: bool) -> str:
    doc = parse_one_document(sample_text, OPERATOR_CONFIG_FILE)
    if not isinstance(doc, dict):
        raise ManifestError(OPERATOR_CONFIG_FILE, "expected a YAML mapping")
    data = doc.get("data") or {}
    if not isinstance(data, dict):
        raise ManifestError(OPERATOR_CONFIG_FILE, "data is not a mapping")
    data.update(OPERATOR_FIXED_DATA)

    optional = [(TLS_SECRET_KEY, tls_secret_name(project), tls), (IMPOSE_LIMITS_KEY, "true", not local)]
    for key, value, enabled in optional:
        if enabled:
            data[key] = value
    doc["data"] = data

    hints: Dict[str, str] = {
        "entando.k8s.operator.image.pull.secrets": "sample-pull-secret",
        "entando.docker.registry.override": "docker.io",
        "entando.ca.secret.name": "sample-ca-cert-secret",
        "entando.assume.external.https.provider": "true",
    }
    for key, value, enabled in optional:
        if not enabled:
            hints[key] = value

    return dump_document(doc) + "\n# More..\n" + commented(dump_document(hints), indent="  ")


def entando_app(project: str, namespace: str, hostname: str) -> Record:
    return {
        "apiVersion": "entando.org/v1",
        "kind": "EntandoApp",
        "metadata": {"namespace": namespace, "name": project},
        "spec": {
            "dbms": "postgresql",
            "ingressHostName": hostname,
            "standardServerImage": "tomcat",
            "environmentVariables": [{"name": "MAX_RAM_PERCENTAGE", "value": "75"}],
            "replicas": 1,
            "resourceRequirements": {
                "requests": {"cpu": "100m", "memory": "448Mi"},
                "limits": {"cpu": "1500m", "memory": "3Gi"},
            },
        },
    }


def database_service(project: str) -> Record:
    return {
        "apiVersion": "entando.org/v1",
        "kind": "EntandoDatabaseService",
        "metadata": {
            "name": f"{project}-ds",
            "annotations": {
                "entando.org/controller-image": "entando-k8s-database-service-controller",
                "entando.org/supported-capabilities": "mysql.dbms,oracle.dbms,postgresql.dbms,dbms",
            },
            "labels": {"entando.org/crd-of-interest": "EntandoDatabaseService"},
        },
        "spec": {
            "dbms": "postgresql",
            "provisioningStrategy": "UseExternal",
            "host": None,
            "port": 5432,
            "databaseName": f"{project}_db",
            "secretName": "postgresql-secret",
            "providedCapabilityScope": "Namespace",
            "replicas": 1,
        },
    }


def app_manifest(project: str, namespace: str, hostname: str) -> str:
    return (
        "---\n"
        + dump_document(entando_app(project, namespace, hostname))
        + "---\n"
        + commented(dump_document(database_service(project)))
    )


def postgres_secret() -> Record:
    return {
        "apiVersion": "v1",
        "kind": "Secret",
        "metadata": {"name": "postgresql-secret"},
        "stringData": {"username": "postgres", "password": "postgres"},
    }


def postgres_secret_manifest() -> str:
    return commented(dump_document(postgres_secret()))


def tls_certificate(project: str, namespace: str, hostname: str) -> Record:
    return {
        "apiVersion": "cert-manager.io/v1",
        "kind": "Certificate",
        "metadata": {"name": tls_secret_name(project), "namespace": namespace},
        "spec": {
            "secretName": tls_secret_name(project),
            "issuerRef": {
                "group": "cert-manager.io",
                "kind": "ClusterIssuer",
                "name": "letsencrypt-prod-cluster",
            },
            "dnsNames": [hostname],
            "usages": ["digital signature", "key encipherment"],
        },
    }


def redeploy_patch() -> Record:
    return {"metadata": {"annotations": {"entando.org/processing-instruction": "force"}}}
