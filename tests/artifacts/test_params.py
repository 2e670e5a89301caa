import pytest
from pydantic import ValidationError

from kubespawn.artifacts.params import CgroupDriver, ContainerRuntime, ParameterSet


def test_camel_case_and_snake_case_are_equivalent():
    a = ParameterSet(ContainerRuntime="rkt", RuntimeEndpoint="/run/rktlet.sock", PodNetworkCIDR="10.32.0.0/12")
    b = ParameterSet(container_runtime="rkt", runtime_endpoint="/run/rktlet.sock", pod_network_cidr="10.32.0.0/12")
    assert a == b
    assert a.container_runtime is ContainerRuntime.RKT


def test_defaults_are_empty():
    p = ParameterSet()
    assert p.container_runtime is None
    assert p.use_legacy_cgroup_driver is False
    assert p.runtime_endpoint == ""
    assert p.cluster_cidr == ""
    assert p.hyperkube_image == ""


def test_unknown_runtime_rejected():
    with pytest.raises(ValidationError):
        ParameterSet(container_runtime="cri-o")


def test_runtime_is_case_insensitive_and_blank_means_unset():
    assert ParameterSet(container_runtime="Docker").container_runtime is ContainerRuntime.DOCKER
    assert ParameterSet(container_runtime="  ").container_runtime is None


def test_unknown_field_rejected():
    with pytest.raises(ValidationError):
        ParameterSet(container_runtime="docker", runtime="docker")


def test_frozen():
    p = ParameterSet(container_runtime="docker")
    with pytest.raises(ValidationError):
        p.runtime_endpoint = "/run/x.sock"


@pytest.mark.parametrize("cidr", ["10.32.0.0/12", "192.168.0.0/16", "fc00::/64"])
def test_valid_cidrs(cidr):
    assert ParameterSet(pod_network_cidr=cidr).pod_network_cidr == cidr


@pytest.mark.parametrize("cidr", ["10.32.0.0", "not-a-cidr", "10.0.0.0/33"])
def test_invalid_cidrs(cidr):
    with pytest.raises(ValidationError):
        ParameterSet(cluster_cidr=cidr)


def test_cidr_whitespace_only_is_empty():
    assert ParameterSet(cluster_cidr="   ").cluster_cidr == ""


@pytest.mark.parametrize("version", ["v1.10.0", "1.9.7", "v1.11.0-beta.1"])
def test_valid_versions(version):
    assert ParameterSet(kubernetes_version=version).kubernetes_version == version


@pytest.mark.parametrize("version", ["latest", "v1.10", "1.x.0"])
def test_invalid_versions(version):
    with pytest.raises(ValidationError):
        ParameterSet(kubernetes_version=version)


def test_reset_options_kept_verbatim():
    p = ParameterSet(kubeadm_reset_options=" --force ")
    assert p.kubeadm_reset_options == " --force "


def test_cgroup_driver_mapping():
    assert ParameterSet(use_legacy_cgroup_driver=True).cgroup_driver is CgroupDriver.CGROUPFS
    assert ParameterSet(use_legacy_cgroup_driver=False).cgroup_driver is CgroupDriver.SYSTEMD


def test_remote_runtime_is_anything_but_docker():
    assert ParameterSet(container_runtime="rkt").remote_runtime is True
    assert ParameterSet(container_runtime="docker").remote_runtime is False
    assert ParameterSet().remote_runtime is False


def test_missing_lists_empty_fields():
    p = ParameterSet(container_runtime="rkt")
    assert p.missing(["runtime_endpoint", "container_runtime", "cni_plugin"]) == [
        "cni_plugin",
        "runtime_endpoint",
    ]


def test_template_context_uses_resolved_tokens():
    ctx = ParameterSet(container_runtime="rkt", use_legacy_cgroup_driver=True).template_context()
    assert ctx["container_runtime"] == "rkt"
    assert ctx["cgroup_driver"] == "cgroupfs"
    assert "use_legacy_cgroup_driver" not in ctx


@pytest.mark.parametrize(
    "field,value",
    [
        ("runtime_endpoint", "/run/my rkt/rktlet.sock"),
        ("runtime_endpoint", "/run/x.sock\ncgroupDriver: cgroupfs"),
        ("runtime_endpoint", "/run/x\x00.sock"),
        ("cni_plugin", "ptp --net=host"),
        ("cni_plugin", "ptp\nExecStartPre=/bin/true"),
        ("hyperkube_image", "quay.io/coreos/hyperkube:v1.10.0\nnetworking:"),
    ],
)
def test_single_token_fields_reject_whitespace_and_control_chars(field, value):
    with pytest.raises(ValidationError) as exc:
        ParameterSet(**{"container_runtime": "rkt", field: value})
    assert "whitespace or control characters" in str(exc.value)


def test_single_token_fields_still_strip_outer_whitespace():
    p = ParameterSet(runtime_endpoint="  /run/rktlet.sock\n", cni_plugin=" ptp ")
    assert p.runtime_endpoint == "/run/rktlet.sock"
    assert p.cni_plugin == "ptp"
