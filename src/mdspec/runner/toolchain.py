"""Invoke the external toolchain on a fragment directory.

Output of the child is copied byte for byte to the console while it runs and
also kept in memory, separately per stream and interleaved in a combined
buffer. The kept copy has ANSI escape sequences removed.
"""

from __future__ import annotations

import re
import subprocess
import sys
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Any, Callable, Sequence

from mdspec.snippets.model import Fragment, Multiple

DEFAULT_TOOLCHAIN = "scala-cli"
TEST_FILE_SUFFIX = ".test.scala"
MISSING_EXECUTABLE_EXIT = 127

_CHUNK_SIZE = 4096
_ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]")

Sink = Callable[[bytes], None]
PopenFn = Callable[..., subprocess.Popen[Any]]


@dataclass(frozen=True)
class RunOutcome:
    exit_code: int
    stdout: str
    stderr: str
    combined: str


def strip_ansi(text: str) -> str:
    return _ANSI_ESCAPE_RE.sub("", text)


def _decode(data: bytes | bytearray) -> str:
    return strip_ansi(bytes(data).decode("utf-8", errors="replace"))


def console_sink(stream: IO[str]) -> Sink:
    buffer = getattr(stream, "buffer", None)

    def _write(chunk: bytes) -> None:
        if buffer is not None:
            buffer.write(chunk)
            buffer.flush()
        else:
            stream.write(chunk.decode("utf-8", errors="replace"))
            stream.flush()

    return _write


def _pump(source: IO[bytes], sinks: Sequence[Sink]) -> None:
    # Drain to EOF even after a sink fails; a failed sink gets no more chunks.
    live = list(sinks)
    while True:
        chunk = source.read1(_CHUNK_SIZE)  # type: ignore[attr-defined]
        if not chunk:
            break
        for sink in list(live):
            try:
                sink(chunk)
            except (OSError, ValueError):
                live.remove(sink)


def run_command(
    command: Sequence[str],
    *,
    cwd: Path | None = None,
    popen_fn: PopenFn = subprocess.Popen,
    stdout_sink: Sink | None = None,
    stderr_sink: Sink | None = None,
) -> RunOutcome:
    argv = list(command)
    try:
        process = popen_fn(
            argv,
            cwd=cwd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )
    except OSError as exc:
        message = f"{argv[0]}: {exc}\n"
        return RunOutcome(
            exit_code=MISSING_EXECUTABLE_EXIT,
            stdout="",
            stderr=message,
            combined=message,
        )
    if stdout_sink is None:
        stdout_sink = console_sink(sys.stdout)
    if stderr_sink is None:
        stderr_sink = console_sink(sys.stderr)

    out = bytearray()
    err = bytearray()
    combined = bytearray()
    combined_lock = threading.Lock()

    def _combined(chunk: bytes) -> None:
        with combined_lock:
            combined.extend(chunk)

    pumps = [
        threading.Thread(
            target=_pump,
            args=(process.stdout, (out.extend, _combined, stdout_sink)),
            daemon=True,
        ),
        threading.Thread(
            target=_pump,
            args=(process.stderr, (err.extend, _combined, stderr_sink)),
            daemon=True,
        ),
    ]
    for pump in pumps:
        pump.start()
    for pump in pumps:
        pump.join()
    exit_code = process.wait()
    return RunOutcome(
        exit_code=int(exit_code),
        stdout=_decode(out),
        stderr=_decode(err),
        combined=_decode(combined),
    )


def runs_as_test(fragment: Fragment) -> bool:
    content = fragment.content
    return isinstance(content, Multiple) and any(
        file_name.endswith(TEST_FILE_SUFFIX) for file_name in content.files
    )


def toolchain_command(
    fragment: Fragment, directory: Path, *, toolchain: str = DEFAULT_TOOLCHAIN
) -> list[str]:
    mode = "test" if runs_as_test(fragment) else "run"
    return [toolchain, mode, str(directory)]


def run_fragment(
    fragment: Fragment,
    directory: Path,
    *,
    toolchain: str = DEFAULT_TOOLCHAIN,
    run_command_fn: Callable[..., RunOutcome] = run_command,
) -> RunOutcome:
    return run_command_fn(toolchain_command(fragment, directory, toolchain=toolchain))
