import pytest
import yaml

from entando_install import manifests
from entando_install.errors import ManifestError
from entando_install.records import valid_records

OPERATOR_SAMPLE = """\
apiVersion: v1
kind: ConfigMap
metadata:
  name: entando-operator-config
data:
  entando.pod.completion.timeout.seconds: "2000"
"""


def test_operator_config_with_tls_in_cluster():
    text = manifests.operator_config(OPERATOR_SAMPLE, "demo", tls=True, local=False)
    doc = manifests.parse_one_document(text)

    assert doc["metadata"]["name"] == "entando-operator-config"
    assert doc["data"]["entando.pod.completion.timeout.seconds"] == "2000"
    assert doc["data"]["entando.requires.filesystem.group.override"] == "true"
    assert doc["data"]["entando.ingress.class"] == "nginx"
    assert doc["data"][manifests.TLS_SECRET_KEY] == "demo-tls-secret"
    assert doc["data"][manifests.IMPOSE_LIMITS_KEY] == "true"
    assert "#  entando.ca.secret.name: sample-ca-cert-secret" in text


def test_operator_config_local_without_tls_keeps_hints_commented():
    text = manifests.operator_config(OPERATOR_SAMPLE, "demo", tls=False, local=True)
    doc = manifests.parse_one_document(text)

    assert manifests.TLS_SECRET_KEY not in doc["data"]
    assert manifests.IMPOSE_LIMITS_KEY not in doc["data"]
    assert "#  entando.tls.secret.name: demo-tls-secret" in text
    assert "#  entando.k8s.operator.impose.limits: 'true'" in text


def test_operator_config_without_data_section():
    sample = "apiVersion: v1\nkind: ConfigMap\nmetadata:\n  name: cfg\n"
    doc = manifests.parse_one_document(manifests.operator_config(sample, "demo", tls=False, local=False))
    assert doc["data"]["entando.ingress.class"] == "nginx"


def test_app_manifest_has_a_single_live_document():
    text = manifests.app_manifest("demo", "entando", "demo.example.com")
    docs = valid_records(manifests.parse_all_documents(text))

    assert len(docs) == 1
    app = docs[0]
    assert app["kind"] == "EntandoApp"
    assert app["metadata"] == {"namespace": "entando", "name": "demo"}
    assert app["spec"]["ingressHostName"] == "demo.example.com"
    assert app["spec"]["environmentVariables"] == [{"name": "MAX_RAM_PERCENTAGE", "value": "75"}]
    assert "#  name: demo-ds" in text
    assert "#  databaseName: demo_db" in text


def test_postgres_secret_is_fully_commented():
    text = manifests.postgres_secret_manifest()
    assert text.startswith("#apiVersion: v1")
    assert valid_records(manifests.parse_all_documents(text)) == []


def test_tls_certificate():
    cert = yaml.safe_load(manifests.dump_document(manifests.tls_certificate("demo", "entando", "demo.example.com")))
    assert cert["metadata"] == {"name": "demo-tls-secret", "namespace": "entando"}
    assert cert["spec"]["secretName"] == "demo-tls-secret"
    assert cert["spec"]["dnsNames"] == ["demo.example.com"]
    assert cert["spec"]["issuerRef"]["kind"] == "ClusterIssuer"


def test_file_names():
    assert manifests.app_file("demo") == "entando-demo-app.yaml"
    assert manifests.tls_cert_file("demo") == "demo-tls-cert.yaml"


def test_redeploy_patch():
    doc = yaml.safe_load(manifests.dump_document(manifests.redeploy_patch()))
    assert doc == {"metadata": {"annotations": {"entando.org/processing-instruction": "force"}}}


def test_broken_yaml_names_the_file():
    with pytest.raises(ManifestError, match="namespace-resources.yaml"):
        manifests.parse_all_documents("data: [unclosed\n", manifests.NAMESPACE_RESOURCES_FILE)


def test_operator_config_sample_must_be_a_mapping():
    with pytest.raises(ManifestError, match=manifests.OPERATOR_CONFIG_FILE):
        manifests.operator_config("- just\n- a list\n", "demo", tls=False, local=False)
