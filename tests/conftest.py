import pytest

from kubespawn.artifacts.params import ParameterSet
from kubespawn.render.engine import RenderingEngine
from kubespawn.render.store import TemplateStore


@pytest.fixture(scope="session")
def store():
    return TemplateStore.load()


@pytest.fixture
def engine(store):
    return RenderingEngine(store)


@pytest.fixture
def docker_params():
    return ParameterSet(
        container_runtime="docker",
        kubernetes_version="v1.10.0",
        cni_plugin="weave",
    )


@pytest.fixture
def rkt_params():
    # the reference rkt node used throughout the kube-spawn docs
    return ParameterSet(
        ContainerRuntime="rkt",
        UseLegacyCgroupDriver=False,
        RuntimeEndpoint="/run/rktlet.sock",
        CNIPlugin="ptp",
        ClusterCIDR="",
        PodNetworkCIDR="10.32.0.0/12",
        KubernetesVersion="v1.10.0",
    )
