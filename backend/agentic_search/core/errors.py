"""Error taxonomy for configuration, backend clients and orchestration."""

from __future__ import annotations

from typing import Sequence

from agentic_search.models.entities import Origin


class AgenticSearchError(Exception):
    """Base class for every error raised by this package."""


class ConfigError(AgenticSearchError):
    """Raised when the configuration cannot be resolved."""


class MissingRequiredField(ConfigError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"{name} environment variable or --{_flag(name)} argument is required")


class InvalidValue(ConfigError):
    def __init__(self, field: str, raw: object, reason: str | None = None) -> None:
        self.field = field
        self.raw = raw
        self.reason = reason
        message = f"Invalid value for {field}: {raw!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class ExternalServiceError(AgenticSearchError):
    """A call to an external collaborator failed.

    ``kind`` is one of ``network``, ``status``, ``unparsable`` or ``query``.
    """

    def __init__(self, backend: str, kind: str, cause: BaseException | str) -> None:
        self.backend = backend
        self.kind = kind
        self.cause = cause
        super().__init__(f"{backend} {kind} error: {cause}")

    def to_dict(self) -> dict[str, str]:
        return {"backend": self.backend, "kind": self.kind, "message": str(self.cause)}


class OrchestrationError(AgenticSearchError):
    """Final failure of one search call."""

    causes: tuple[ExternalServiceError, ...] = ()

    def to_dict(self) -> dict[str, object]:
        return {"error": str(self), "causes": [cause.to_dict() for cause in self.causes]}


class BackendFailed(OrchestrationError):
    def __init__(self, origin: Origin, cause: ExternalServiceError) -> None:
        self.origin = origin
        self.cause = cause
        self.causes = (cause,)
        super().__init__(f"{origin.value} search failed: {cause}")


class AllBackendsFailed(OrchestrationError):
    def __init__(self, causes: Sequence[ExternalServiceError]) -> None:
        self.causes = tuple(causes)
        joined = "; ".join(str(cause) for cause in self.causes)
        super().__init__(f"all search backends failed: {joined}")


def _flag(name: str) -> str:
    return name.lower().replace("_", "-")


__all__ = [
    "AgenticSearchError",
    "ConfigError",
    "MissingRequiredField",
    "InvalidValue",
    "ExternalServiceError",
    "OrchestrationError",
    "BackendFailed",
    "AllBackendsFailed",
]
