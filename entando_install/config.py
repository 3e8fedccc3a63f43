import os

RELEASES_BASE_URL = os.getenv(
    "ENTANDO_RELEASES_BASE_URL",
    "https://raw.githubusercontent.com/entando/entando-releases",
)
TAGS_URL = os.getenv(
    "ENTANDO_TAGS_URL",
    "https://api.github.com/repos/entando/entando-releases/tags?per_page=200",
)
HTTP_TIMEOUT = int(os.getenv("ENTANDO_HTTP_TIMEOUT", "20"))

DIST_PATH = "dist/ge-1-1-6"

CLUSTER_RESOURCES_URL = RELEASES_BASE_URL + "/${version}/" + DIST_PATH + "/namespace-scoped-deployment/cluster-resources.yaml"
NAMESPACE_RESOURCES_URL = RELEASES_BASE_URL + "/${version}/" + DIST_PATH + "/namespace-scoped-deployment/namespace-resources.yaml"
OPERATOR_CONFIG_URL = RELEASES_BASE_URL + "/${version}/" + DIST_PATH + "/samples/entando-operator-config.yaml"

# Kubeconfig context name the client falls back to when nothing was configured
SUSPICIOUS_CONTEXT = "loaded-context"

VERSION_PAGE_SIZE = 10

ENTANDO_APP_API_VERSION = "entando.org/v1"
ENTANDO_APP_KIND = "EntandoApp"


def release_url(template: str, version: str) -> str:
    return template.replace("${version}", version)
