from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Callable, Mapping, Optional

if TYPE_CHECKING:
    from devsetup.env import RunnerConfig


class StepStatus(str, Enum):
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class RunState(str, Enum):
    COMPLETED = "completed"
    ABORTED = "aborted"


class RestartPolicy(str, Enum):
    NO = "no"
    ON_FAILURE = "on-failure"
    ALWAYS = "always"
    UNLESS_STOPPED = "unless-stopped"


@dataclass(frozen=True)
class ActionResult:
    ok: bool
    detail: str
    exit_code: int = 0
    command: str = ""
    stdout: str = ""
    stderr: str = ""
    # output was logged line by line while the command ran
    streamed: bool = False


@dataclass(frozen=True)
class Step:
    name: str
    action: Callable[[RunnerConfig], ActionResult]
    required: bool = False
    section: str = ""
    description: str = ""
    # argv for a best-effort "--version" style query after success
    version: Optional[Callable[[RunnerConfig], list[str]]] = None
    # name of an earlier step that must have succeeded
    depends_on: Optional[str] = None


@dataclass(frozen=True)
class StepResult:
    step_name: str
    status: StepStatus
    detail: str
    exit_code: int = 0
    version: Optional[str] = None


@dataclass(frozen=True)
class RunOutcome:
    state: RunState
    results: list[StepResult]

    @property
    def exit_code(self) -> int:
        return 1 if self.state == RunState.ABORTED else 0

    def by_status(self, status: StepStatus) -> list[StepResult]:
        return [r for r in self.results if r.status == status]


@dataclass(frozen=True)
class ContainerSpec:
    name: str
    image: str
    env: Mapping[str, str] = field(default_factory=dict)
    ports: tuple[tuple[int, int], ...] = ()
    restart_policy: RestartPolicy = RestartPolicy.NO
    volumes: tuple[tuple[str, str], ...] = ()
    network: Optional[str] = None
    args: tuple[str, ...] = ()


@dataclass(frozen=True)
class LaunchResult:
    ok: bool
    exit_code: int
    detail: str
    container_status: Optional[str] = None
