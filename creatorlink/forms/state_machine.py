"""Step state machine for the multi-step inquiry form."""

from __future__ import annotations

from typing import Callable

FORM_STEPS = (
    "Basic Information",
    "Project Details",
    "Budget & Timeline",
    "Content Requirements",
    "Additional Preferences",
    "Review & Submit",
)
FIRST_STEP = 1
REVIEW_STEP = len(FORM_STEPS)


class InvalidTransitionError(ValueError):
    """Raised when a disallowed step transition is attempted."""


class StepController:
    """Tracks the current step; forward moves are gated by a validator.

    ``validate`` maps a step number to an error set; an empty mapping lets
    the controller advance.
    """

    def __init__(self, validate: Callable[[int], dict[str, str]], step: int = FIRST_STEP) -> None:
        if not FIRST_STEP <= step <= REVIEW_STEP:
            raise InvalidTransitionError(f"Step out of range: {step}")
        self._validate = validate
        self.step = step

    @staticmethod
    def can_transition(current: int, target: int) -> bool:
        if not (FIRST_STEP <= current <= REVIEW_STEP and FIRST_STEP <= target <= REVIEW_STEP):
            return False
        return abs(target - current) == 1

    def assert_transition(self, target: int) -> None:
        if not self.can_transition(self.step, target):
            raise InvalidTransitionError(f"Transition not allowed: {self.step} -> {target}")

    def move_to(self, target: int) -> int:
        self.assert_transition(target)
        self.step = target
        return self.step

    def advance(self) -> dict[str, str]:
        """Validate the current step and move forward if it is clean.

        The review step is terminal: advancing there only re-validates.
        """
        errors = self._validate(self.step)
        if not errors and self.step < REVIEW_STEP:
            self.move_to(self.step + 1)
        return errors

    def retreat(self) -> int:
        if self.step > FIRST_STEP:
            self.move_to(self.step - 1)
        return self.step

    @property
    def is_review(self) -> bool:
        return self.step == REVIEW_STEP

    @property
    def title(self) -> str:
        return FORM_STEPS[self.step - 1]

    @property
    def progress_percent(self) -> int:
        return round(self.step / REVIEW_STEP * 100)
