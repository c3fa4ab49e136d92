"""Interface for readiness probes."""

import abc

# pylint: disable=too-few-public-methods


class ReadinessProbe(abc.ABC):
    """Contract for a lightweight connectivity check against a dependency.

    Implementations must not raise for transport or authentication failures;
    those mean "not ready yet" and are reported as ``False``.
    """

    @abc.abstractmethod
    def check(self) -> bool:
        """Probe the dependency once and report whether it is ready."""

    def close(self) -> None:
        """Release any resources held by the probe."""
