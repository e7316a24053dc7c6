"""Rule evaluation results."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from blathr.core.enums import ConstraintLevel


class ConstraintResult(BaseModel):
    """Outcome of one constraint."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str
    passed: bool
    level: ConstraintLevel = ConstraintLevel.HARD
    message: str | None = None


class InvariantResult(BaseModel):
    """Outcome of one invariant."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str
    passed: bool
    message: str | None = None


class ValidationResult(BaseModel):
    """Combined outcome of constraints and invariants for one candidate.

    Attributes:
        valid: No hard constraint and no invariant failed.
        constraint_results: Per-constraint outcomes, in evaluation order.
        invariant_results: Per-invariant outcomes, in evaluation order.
        hard_constraints_failed: Ids of failed hard constraints.
        soft_constraints_failed: Ids of failed soft constraints.
        invariants_failed: Ids of failed invariants.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    valid: bool
    constraint_results: list[ConstraintResult] = Field(default_factory=list)
    invariant_results: list[InvariantResult] = Field(default_factory=list)
    hard_constraints_failed: list[str] = Field(default_factory=list)
    soft_constraints_failed: list[str] = Field(default_factory=list)
    invariants_failed: list[str] = Field(default_factory=list)

    @property
    def acceptable(self) -> bool:
        """True when valid, or when only soft constraints failed."""
        return not self.hard_constraints_failed and not self.invariants_failed
