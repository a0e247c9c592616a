import logging
from typing import Callable, Optional
from .models.assignment import AssignmentStatus

logger = logging.getLogger(__name__)

MESSAGE_TEMPLATES = {
    AssignmentStatus.RELEASED: "Observer → {student}, {assignment} has been released.",
    AssignmentStatus.WORKING: "Observer → {student} is working on {assignment}.",
    AssignmentStatus.SUBMITTED: "Observer → {student} has submitted {assignment}.",
    AssignmentStatus.PASS: "Observer → {student} has passed {assignment}",
    AssignmentStatus.FAIL: "Observer → {student} has failed {assignment}",
    AssignmentStatus.FINAL_REMINDER: "Observer → Reminder for {student}: {assignment} is due soon.",
}
DEFAULT_TEMPLATE = "Observer → {student}, {assignment} status is {status}."


class Observer:
    """
    Prints a notification whenever a student's assignment status changes.
    Holds no state besides the output sink.
    """

    def __init__(self, emit: Optional[Callable[[str], None]] = None):
        self._emit = emit if emit is not None else print

    @staticmethod
    def format_message(student, assignment) -> str:
        status = assignment.status
        template = MESSAGE_TEMPLATES.get(status, DEFAULT_TEMPLATE)
        return template.format(
            student=student.full_name,
            assignment=assignment.name,
            status=getattr(status, 'value', status),
        )

    def notify(self, student, assignment):
        message = self.format_message(student, assignment)
        logger.debug(message)
        self._emit(message)
