import logging
import random
from typing import Dict, List, Optional
from .models.assignment import Assignment, AssignmentStatus
from .scheduler import default_scheduler
from .utils.config import WORK_DELAY, GRADING_DELAY

logger = logging.getLogger(__name__)

NOT_ASSIGNED_MESSAGE = "Hasn't been assigned"

# Student: owns a student's assignments and drives them through the lifecycle
# Work and grading are simulated with deferred callbacks on the scheduler


class Student:
    """
    A student and their assignments, keyed by assignment name.

    Assignments are created on first reference. Starting work schedules an
    automatic submission and every submission schedules a random grade, both
    on the injected scheduler.
    """

    def __init__(self, full_name: str, email: str, observer=None, scheduler=None, rng: Optional[random.Random] = None):
        self.full_name = full_name
        self.email = email
        self.overall_grade: Optional[float] = None
        self._assignments: Dict[str, Assignment] = {}
        self._observer = observer
        self._scheduler = scheduler if scheduler is not None else default_scheduler
        self._rng = rng if rng is not None else random.Random()

    def __repr__(self) -> str:
        return f"Student(name='{self.full_name}', assignments={len(self._assignments)})"

    def set_full_name(self, full_name: str):
        self.full_name = full_name

    def set_email(self, email: str):
        self.email = email

    @property
    def assignments(self) -> List[Assignment]:
        """Assignments in the order they were first referenced."""
        return list(self._assignments.values())

    def get_assignment(self, assignment_name: str) -> Optional[Assignment]:
        return self._assignments.get(assignment_name)

    def _get_or_create_assignment(self, assignment_name: str, status: AssignmentStatus = AssignmentStatus.NOT_ASSIGNED) -> Assignment:
        assignment = self._assignments.get(assignment_name)
        if assignment is None:
            assignment = Assignment(assignment_name)
            assignment.set_status(status)
            self._assignments[assignment_name] = assignment
            logger.debug(f"Created assignment {assignment_name} for {self.full_name}")
        return assignment

    def _notify_observer(self, assignment: Assignment, observer=None):
        """Calls ``notify`` on the observer if there is one; failures are logged, never raised."""
        observer = observer if observer is not None else self._observer
        notify = getattr(observer, 'notify', None)
        if not callable(notify):
            return
        try:
            notify(self, assignment)
        except Exception as e:
            logger.error(f"Observer failed for {self.full_name}, {assignment.name}: {e}")

    def update_assignment_status(self, assignment_name: str, grade=None):
        """
        Releases the assignment if it doesn't exist yet and applies a grade if one is given.
        An existing status is not overridden. The observer is always notified.

        Args:
            assignment_name: Name of the assignment
            grade: Optional numeric grade; anything non-numeric is ignored
        """
        assignment = self._get_or_create_assignment(assignment_name, AssignmentStatus.RELEASED)

        if isinstance(grade, (int, float)) and not isinstance(grade, bool):
            assignment.set_grade(grade)
            self.get_grade()
        elif grade is not None:
            logger.warning(f"Ignoring non-numeric grade for {assignment_name}: {grade!r}")

        self._notify_observer(assignment)

    def get_assignment_status(self, assignment_name: str) -> str:
        """Returns 'Pass', 'Fail', "Hasn't been assigned" or the raw in-progress status."""
        assignment = self._assignments.get(assignment_name)
        if assignment is None:
            return NOT_ASSIGNED_MESSAGE
        if assignment.status is AssignmentStatus.PASS:
            return "Pass"
        if assignment.status is AssignmentStatus.FAIL:
            return "Fail"
        return assignment.status.value

    def start_working(self, assignment_name: str):
        assignment = self._get_or_create_assignment(assignment_name)
        if assignment.status.is_terminal:
            logger.debug(f"{self.full_name} cannot start {assignment_name}, it is already graded")
            return

        assignment.set_status(AssignmentStatus.WORKING)
        self._notify_observer(assignment)
        self._scheduler.call_later(WORK_DELAY, self._auto_submit, assignment)

    def _auto_submit(self, assignment: Assignment):
        # May fire after a reminder already submitted it
        if assignment.is_submitted or assignment.status.is_terminal:
            return
        self.submit_assignment(assignment.name)

    def submit_assignment(self, assignment_name: str):
        """Submits once; later calls are ignored. Grading follows after a delay."""
        assignment = self._get_or_create_assignment(assignment_name)
        if assignment.is_submitted or assignment.status.is_terminal:
            logger.debug(f"{assignment_name} already submitted by {self.full_name}")
            return

        assignment.is_submitted = True
        assignment.set_status(AssignmentStatus.SUBMITTED)
        self._notify_observer(assignment)
        self._scheduler.call_later(GRADING_DELAY, self._grade_assignment, assignment)

    def _grade_assignment(self, assignment: Assignment):
        grade = self._rng.randint(0, 100)
        assignment.set_grade(grade)
        self.get_grade()
        logger.info(f"{self.full_name} received {grade} on {assignment.name}")
        self._notify_observer(assignment)

    def send_reminder(self, assignment_name: str, observer=None) -> bool:
        """
        Escalates an unfinished assignment to a final reminder and forces submission.

        Args:
            assignment_name: Name of the assignment
            observer: Observer to notify of the reminder instead of the student's own

        Returns:
            True if a reminder was sent, False if the assignment is missing or already graded
        """
        assignment = self._assignments.get(assignment_name)
        if assignment is None or assignment.status.is_terminal:
            return False

        assignment.set_status(AssignmentStatus.FINAL_REMINDER)
        self._notify_observer(assignment, observer)
        self.submit_assignment(assignment_name)
        return True

    def get_grade(self) -> Optional[float]:
        """
        Averages every graded assignment with equal weight and caches it in overall_grade.

        Returns:
            The average, or None if nothing has been graded
        """
        grades = [a.grade for a in self._assignments.values() if a.grade is not None]
        self.overall_grade = sum(grades) / len(grades) if grades else None
        return self.overall_grade
