"""Structural validation of workflow definitions."""

from __future__ import annotations

from typing import List, Protocol

from .contracts import StepType, Workflow
from .errors import ValidationError

NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500

STEP_TYPES = {t.value for t in StepType}


class Validator(Protocol):
    """Collaborator that checks a workflow before it runs."""

    def validate(self, workflow: Workflow) -> None:
        """Raise ``ValidationError`` if ``workflow`` is malformed."""


class WorkflowValidator:
    """Default validator enforcing the FlowLink workflow rules.

    Every problem is collected; a single ``ValidationError`` with code
    ``VALIDATION_FAILED`` is raised carrying them in ``errors``.
    """

    def validate(self, workflow: Workflow) -> None:
        errors: List[ValidationError] = []

        name = (workflow.name or "").strip()
        if len(name) < NAME_MIN_LENGTH:
            errors.append(
                ValidationError(
                    "Workflow name must be at least 3 characters long",
                    "name",
                    "TOO_SHORT",
                )
            )
        if workflow.name and len(workflow.name) > NAME_MAX_LENGTH:
            errors.append(
                ValidationError(
                    "Workflow name cannot exceed 100 characters", "name", "TOO_LONG"
                )
            )
        if workflow.description and len(workflow.description) > DESCRIPTION_MAX_LENGTH:
            errors.append(
                ValidationError(
                    "Workflow description cannot exceed 500 characters",
                    "description",
                    "TOO_LONG",
                )
            )

        errors.extend(self._validate_steps(workflow))

        if errors:
            raise ValidationError(
                "Workflow validation failed", code="VALIDATION_FAILED", errors=errors
            )

    def _validate_steps(self, workflow: Workflow) -> List[ValidationError]:
        try:
            steps = workflow.raw_steps()
        except ValueError:
            return [
                ValidationError(
                    "Invalid workflow steps format", "stepsJson", "INVALID_JSON"
                )
            ]

        if not isinstance(steps, list) or not steps:
            return [
                ValidationError(
                    "Workflow must have at least one step", "stepsJson", "EMPTY_STEPS"
                )
            ]

        errors: List[ValidationError] = []
        for index, step in enumerate(steps):
            position = index + 1
            if not isinstance(step, dict):
                errors.append(
                    ValidationError(
                        f"Step {position} must be an object",
                        f"steps[{index}]",
                        "INVALID_STEP",
                    )
                )
                continue
            step_type = step.get("type")
            if not step_type:
                errors.append(
                    ValidationError(
                        f"Step {position} must have a type",
                        f"steps[{index}].type",
                        "MISSING_TYPE",
                    )
                )
            elif step_type not in STEP_TYPES:
                errors.append(
                    ValidationError(
                        f"Step {position} has invalid type",
                        f"steps[{index}].type",
                        "INVALID_TYPE",
                    )
                )
            if step_type != StepType.DELAY.value and not step.get("platform"):
                errors.append(
                    ValidationError(
                        f"Step {position} must specify a platform",
                        f"steps[{index}].platform",
                        "MISSING_PLATFORM",
                    )
                )

        types = {s.get("type") for s in steps if isinstance(s, dict)}
        if StepType.TRIGGER.value not in types:
            errors.append(
                ValidationError(
                    "Workflow must have at least one trigger",
                    "stepsJson",
                    "MISSING_TRIGGER",
                )
            )
        if StepType.ACTION.value not in types:
            errors.append(
                ValidationError(
                    "Workflow must have at least one action",
                    "stepsJson",
                    "MISSING_ACTION",
                )
            )
        return errors


__all__ = ["Validator", "WorkflowValidator"]
