from __future__ import annotations

from devsetup import subproc
from devsetup.logger import get_logger
from devsetup.model import ContainerSpec, LaunchResult

log = get_logger("devsetup.container")

DOCKER = "docker"


def run_argv(spec: ContainerSpec) -> list[str]:
    argv = [DOCKER, "run", "--name", spec.name]
    for key, value in spec.env.items():
        argv += ["-e", f"{key}={value}"]
    for host, container in spec.ports:
        argv += ["-p", f"{host}:{container}"]
    for source, target in spec.volumes:
        argv += ["-v", f"{source}:{target}"]
    if spec.network:
        argv.append(f"--network={spec.network}")
    argv += ["--restart", spec.restart_policy.value, "-d", spec.image]
    argv += list(spec.args)
    return argv


def status_argv(spec: ContainerSpec) -> list[str]:
    return [DOCKER, "ps", "-f", f"name={spec.name}"]


def launch(spec: ContainerSpec) -> LaunchResult:
    """
    Start the container detached. No retry and no existing-container check:
    a clashing name fails inside docker and is reported as such.
    """
    # -e values can carry secrets, keep them out of the logs
    log.debug(f"$ {DOCKER} run --name {spec.name} ... -d {spec.image}")
    result = subproc.run(run_argv(spec))

    if not result.ok:
        detail = result.stderr.strip() or f"docker exited with {result.exit_code}"
        return LaunchResult(ok=False, exit_code=result.exit_code, detail=detail)

    container_id = result.stdout.strip()
    status = subproc.run(status_argv(spec))
    return LaunchResult(
        ok=True,
        exit_code=0,
        detail=container_id,
        container_status=status.stdout.rstrip() if status.ok else None,
    )
