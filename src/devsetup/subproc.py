from __future__ import annotations

import os
import shlex
import shutil
import subprocess
import tempfile
from collections import deque
from dataclasses import dataclass
from typing import IO, Callable, Mapping, Optional

# Shell convention for "command not found"
EXIT_NOT_FOUND = 127

# Lines of streamed output kept on the result
TAIL_KEEP = 200

# Installer output is not guaranteed to be valid UTF-8
_TEXT = {"encoding": "utf-8", "errors": "replace"}

LineSink = Callable[[str], None]


@dataclass(frozen=True)
class CommandResult:
    command_str: str
    stdout: str
    stderr: str
    exit_code: int
    # output already went out line by line while the command ran
    streamed: bool = False

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


def _command_str(args: list[str]) -> str:
    return " ".join(shlex.quote(p) for p in args)


def _child_env(env_overrides: Mapping[str, str] | None) -> dict[str, str]:
    return {**os.environ, **(env_overrides or {})}


def _drain(out: IO[str], on_line: LineSink | None) -> str:
    tail: deque[str] = deque(maxlen=TAIL_KEEP)
    for raw in out:
        line = raw.rstrip("\n")
        if not line:
            continue
        tail.append(line)
        if on_line is not None:
            on_line(line)
    return "\n".join(tail)


def run(
    args: list[str],
    *,
    env_overrides: Mapping[str, str] | None = None,
    cwd: str | None = None,
) -> CommandResult:
    """Run to completion with stdout/stderr captured separately."""
    command_str = _command_str(args)

    try:
        proc = subprocess.run(
            args,
            cwd=cwd,
            capture_output=True,
            env=_child_env(env_overrides),
            **_TEXT,
        )
    except OSError as e:
        return CommandResult(
            command_str=command_str,
            stdout="",
            stderr=str(e),
            exit_code=EXIT_NOT_FOUND,
        )

    return CommandResult(
        command_str=command_str,
        stdout=proc.stdout,
        stderr=proc.stderr,
        exit_code=proc.returncode,
    )


def stream(
    args: list[str],
    *,
    env_overrides: Mapping[str, str] | None = None,
    on_line: LineSink | None = None,
) -> CommandResult:
    """
    Run with stderr folded into stdout, handing each line to `on_line`
    as it arrives. The result keeps the last TAIL_KEEP lines as stdout.
    """
    command_str = _command_str(args)

    try:
        proc = subprocess.Popen(
            args,
            env=_child_env(env_overrides),
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            bufsize=1,
            **_TEXT,
        )
    except OSError as e:
        return CommandResult(command_str, "", str(e), EXIT_NOT_FOUND, streamed=True)

    assert proc.stdout is not None
    with proc.stdout:
        tail = _drain(proc.stdout, on_line)
    exit_code = proc.wait()

    return CommandResult(command_str, tail, "", exit_code, streamed=True)


def pipe(
    producer: list[str],
    consumer: list[str],
    *,
    env_overrides: Mapping[str, str] | None = None,
    on_line: LineSink | None = None,
) -> CommandResult:
    """
    Run `producer | consumer`, streaming the consumer like `stream`.

    The producer's stderr lands on the result's stderr. Exit status follows
    `set -o pipefail`: the first non-zero of the two wins.
    """
    command_str = f"{_command_str(producer)} | {_command_str(consumer)}"
    env = _child_env(env_overrides)

    # A file, not a pipe: nobody reads it until the consumer is done
    with tempfile.TemporaryFile() as src_err:
        try:
            src = subprocess.Popen(
                producer, stdout=subprocess.PIPE, stderr=src_err, env=env
            )
        except OSError as e:
            return CommandResult(command_str, "", str(e), EXIT_NOT_FOUND, streamed=True)

        try:
            dst = subprocess.Popen(
                consumer,
                stdin=src.stdout,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                bufsize=1,
                env=env,
                **_TEXT,
            )
        except OSError as e:
            src.kill()
            src.wait()
            return CommandResult(command_str, "", str(e), EXIT_NOT_FOUND, streamed=True)

        # Let the producer see SIGPIPE if the consumer exits early
        assert src.stdout is not None
        src.stdout.close()

        assert dst.stdout is not None
        with dst.stdout:
            tail = _drain(dst.stdout, on_line)
        dst_code = dst.wait()
        src_code = src.wait()

        src_err.seek(0)
        stderr = src_err.read().decode("utf-8", errors="replace")

    return CommandResult(
        command_str=command_str,
        stdout=tail,
        stderr=stderr,
        exit_code=src_code or dst_code,
        streamed=True,
    )


def which(name: str, *, path: str | None = None) -> Optional[str]:
    return shutil.which(name, path=path)


def query_version(
    args: list[str],
    *,
    env_overrides: Mapping[str, str] | None = None,
) -> Optional[str]:
    """
    Best-effort version lookup. Returns the first non-empty output line,
    or None when the command is missing or fails.
    """
    result = run(args, env_overrides=env_overrides)
    if not result.ok:
        return None

    for line in (result.stdout + "\n" + result.stderr).splitlines():
        line = line.strip()
        if line:
            return line
    return None
