"""Value objects used across the domain layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class InvocationStrategy(Enum):
    """How a launch candidate is turned into a command line."""

    EXECUTABLE = "executable"
    JAVA_JAR = "java-jar"


@dataclass(frozen=True)
class AssembledInfo:
    """Outcome of a successful cache assembly.

    Attributes:
        path: The assembled artifact.
        size_bytes: Size of the artifact on disk.
        fragment_count: Number of fragments concatenated (0 when reused).
        index_count: Number of sibling ``main_file_cache.idx*`` files found.
        reused: True when an existing, valid artifact short-circuited assembly.
    """

    path: Path
    size_bytes: int
    fragment_count: int
    index_count: int
    reused: bool = False


@dataclass(frozen=True)
class CacheStatus:
    """Read-only view of a cache directory."""

    data_file: Path
    data_size: int | None
    index_count: int
    has_primary_index: bool

    @property
    def ready(self) -> bool:
        """True when the data file and ``idx0`` are both present."""
        return self.data_size is not None and self.has_primary_index


@dataclass(frozen=True)
class Credential:
    """Username/password pair; the password never appears in ``repr``."""

    username: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class HealthProbe:
    """Parameters of one readiness wait.

    Attributes:
        target: Host (``host`` or ``host:port``) of the dependency.
        credential: Credential used for the connectivity+auth check.
        timeout: Seconds allowed for a single probe.
        interval: Seconds slept after each failed probe.
        max_attempts: Number of probes before giving up.
        fail_on_exhaustion: Raise when the budget is exhausted; otherwise warn
            and let the caller proceed.
    """

    target: str
    credential: Credential
    timeout: float = 5.0
    interval: float = 2.0
    max_attempts: int = 30
    fail_on_exhaustion: bool = True

    def __post_init__(self) -> None:
        if self.max_attempts <= 0:
            raise ValueError(f"max_attempts must be positive, got {self.max_attempts}")
        if self.interval <= 0:
            raise ValueError(f"interval must be positive, got {self.interval}")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")


@dataclass(frozen=True, order=True)
class InitUnit:
    """One ordered bootstrap script. Ordering is by name."""

    name: str
    path: Path = field(compare=False)


@dataclass(frozen=True)
class LaunchCandidate:
    """One possible entry point, probed in priority order.

    Attributes:
        path: File to probe; relative paths resolve against the launch directory.
        strategy: How to invoke the file once found.
        args: Extra arguments appended to the command line.
    """

    path: Path
    strategy: InvocationStrategy = InvocationStrategy.EXECUTABLE
    args: tuple[str, ...] = ()
