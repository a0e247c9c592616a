from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional
import pytz

# A grade must be strictly above this to pass
PASS_MARK = 50


class AssignmentStatus(str, Enum):
    NOT_ASSIGNED = "not-assigned"
    RELEASED = "released"
    WORKING = "working"
    SUBMITTED = "submitted"
    FINAL_REMINDER = "final-reminder"
    PASS = "pass"
    FAIL = "fail"

    @property
    def is_terminal(self) -> bool:
        return self in (AssignmentStatus.PASS, AssignmentStatus.FAIL)

    @property
    def is_completed(self) -> bool:
        """Submitted or graded; anything else still counts as outstanding."""
        return self in (AssignmentStatus.SUBMITTED, AssignmentStatus.PASS, AssignmentStatus.FAIL)


@dataclass
class Assignment:
    name: str
    status: AssignmentStatus = AssignmentStatus.NOT_ASSIGNED
    is_submitted: bool = False
    updated_at: Optional[datetime] = None
    _grade: Optional[float] = field(default=None, init=False, repr=False)

    @property
    def grade(self) -> Optional[float]:
        return self._grade

    def set_status(self, status: AssignmentStatus):
        self.status = AssignmentStatus(status)
        self.updated_at = datetime.now(pytz.UTC)

    def set_grade(self, grade: float):
        """Records a grade and moves to pass/fail. 50 is a fail."""
        self._grade = grade
        self.set_status(AssignmentStatus.PASS if grade > PASS_MARK else AssignmentStatus.FAIL)
