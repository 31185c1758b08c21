"""Writes timed scopes as a trace-event JSON file."""

from __future__ import annotations

import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional, TextIO

_HEADER = '{"otherData": {},"traceEvents":['
_FOOTER = "]}"


@dataclass(frozen=True)
class Profile:
    """One timed scope; times are in microseconds."""

    name: str
    start: int
    end: int
    thread_id: int

    @property
    def duration(self) -> int:
        return self.end - self.start


class VisualProfiler:
    """Streams profiles into a trace file between begin_session and end_session."""

    def __init__(self) -> None:
        self._file: Optional[TextIO] = None
        self._session_name: Optional[str] = None
        self._profile_count = 0

    @property
    def session_name(self) -> Optional[str]:
        return self._session_name

    @property
    def active(self) -> bool:
        return self._file is not None

    def begin_session(self, name: str, filepath="ProfileResult.json") -> None:
        if self.active:
            raise RuntimeError(f"session {self._session_name!r} is already running")
        self._file = open(filepath, "w", encoding="utf-8")
        self._session_name = name
        self._profile_count = 0
        self._write(_HEADER)

    def end_session(self) -> None:
        if not self.active:
            raise RuntimeError("no profiling session is running")
        self._write(_FOOTER)
        self._file.close()
        self._file = None
        self._session_name = None
        self._profile_count = 0

    def write_profile(self, profile: Profile) -> None:
        if not self.active:
            raise RuntimeError("no profiling session is running")
        name = profile.name.replace('"', '\\"')
        separator = "," if self._profile_count > 0 else ""
        self._profile_count += 1
        self._write(
            f'{separator}{{"cat":"function",'
            f'"dur":{profile.duration},'
            f'"name":"{name}",'
            f'"ph":"X",'
            f'"pid":0,'
            f'"tid":{profile.thread_id},'
            f'"ts":{profile.start}}}'
        )

    def _write(self, text: str) -> None:
        self._file.write(text)
        self._file.flush()

    def __enter__(self) -> "VisualProfiler":
        return self

    def __exit__(self, *exc_info) -> None:
        if self.active:
            self.end_session()


def _now_us() -> int:
    return time.perf_counter_ns() // 1000


@contextmanager
def profile_scope(profiler: VisualProfiler, name: str) -> Iterator[None]:
    """Time the enclosed block and write it to ``profiler``."""
    start = _now_us()
    try:
        yield
    finally:
        end = _now_us()
        thread_id = threading.get_ident() & 0xFFFFFFFF
        profiler.write_profile(Profile(name, start, end, thread_id))