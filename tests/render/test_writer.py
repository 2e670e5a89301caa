import stat
from pathlib import Path

from kubespawn.artifacts.kinds import ArtifactKind
from kubespawn.render.writer import write_artifacts


def test_write_artifacts_into_rootfs(tmp_path: Path, engine, rkt_params):
    artifacts = engine.render_all(rkt_params)
    written = write_artifacts(tmp_path, artifacts)

    assert len(written) == len(artifacts)
    script = tmp_path / "opt" / "kube-spawn-bootstrap.sh"
    assert script in written
    assert script.read_text() == artifacts[ArtifactKind.BOOTSTRAP_SCRIPT].text
    assert stat.S_IMODE(script.stat().st_mode) == 0o755

    kubelet = tmp_path / "etc" / "kubernetes" / "kubelet.yaml"
    assert stat.S_IMODE(kubelet.stat().st_mode) == 0o644
    assert "CRISocket: /run/rktlet.sock" in kubelet.read_text()


def test_write_artifacts_accepts_iterable(tmp_path: Path, engine, docker_params):
    artifact = engine.render_artifact(ArtifactKind.RUNC_WRAPPER, docker_params)
    (path,) = write_artifacts(tmp_path, [artifact])
    assert path == tmp_path / "usr" / "bin" / "kube-spawn-runc"
    assert stat.S_IMODE(path.stat().st_mode) == 0o755
