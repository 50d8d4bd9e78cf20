"""Admission decision model."""

from dataclasses import dataclass

from routeguard.core.models.errors import AdmissionError, SelectorError


@dataclass(frozen=True)
class AdmissionDecision:
    """Outcome of evaluating one route: allow, or deny with a reason."""

    allowed: bool
    reason: str = ""
    error: AdmissionError | None = None

    @classmethod
    def allow(cls, reason: str = "") -> "AdmissionDecision":
        """Build an allowing decision. The reason is informational only."""
        return cls(allowed=True, reason=reason)

    @classmethod
    def deny(cls, error: AdmissionError) -> "AdmissionDecision":
        """Build a denying decision carrying the error that caused it."""
        return cls(allowed=False, reason=str(error), error=error)

    @property
    def is_configuration_error(self) -> bool:
        """True when the denial comes from a broken cluster policy, not the route."""
        return isinstance(self.error, SelectorError)

    @property
    def error_kind(self) -> str | None:
        return self.error.kind if self.error else None
