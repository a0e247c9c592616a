import asyncio
import logging
from typing import Iterable, List, Optional
from .models.assignment import AssignmentStatus
from .student import Student

logger = logging.getLogger(__name__)

IN_PROGRESS = (AssignmentStatus.RELEASED, AssignmentStatus.WORKING)


class ClassList:
    """
    The roster. Answers questions across every student's assignments
    and runs bulk operations (parallel release, final reminders).
    """

    def __init__(self, observer=None):
        self.students: List[Student] = []
        self._observer = observer

    def __len__(self) -> int:
        return len(self.students)

    def add_student(self, student: Student):
        self.students.append(student)
        logger.info(f"{student.full_name} has been added to the classlist.")

    def remove_student(self, student: Student):
        """Removes this exact student object; a namesake stays on the roster."""
        self.students = [s for s in self.students if s is not student]

    def find_student_by_name(self, full_name: str) -> Optional[Student]:
        return next((s for s in self.students if s.full_name == full_name), None)

    def find_outstanding_assignments(self, assignment_name: str) -> List[str]:
        """
        Lists students who still owe the named assignment.

        Once anyone has submitted (or been graded on) the assignment, this is
        every student holding it who hasn't. Until then it falls back to every
        student with any assignment still released or being worked on.

        Args:
            assignment_name: Name of the assignment

        Returns:
            List of student names
        """
        outstanding = []
        any_completed = False

        for student in self.students:
            assignment = student.get_assignment(assignment_name)
            if assignment is None:
                continue
            if assignment.status.is_completed:
                any_completed = True
            else:
                outstanding.append(student.full_name)

        if any_completed:
            return outstanding

        logger.debug(f"Nobody has submitted {assignment_name}, listing all unfinished work")
        return [
            student.full_name
            for student in self.students
            if any(a.status in IN_PROGRESS for a in student.assignments)
        ]

    async def _release_to_all(self, assignment_name: str):
        await asyncio.sleep(0)
        for student in self.students:
            student.update_assignment_status(assignment_name)
        logger.info(f"Released {assignment_name} to {len(self.students)} students")

    async def release_assignments_parallel(self, assignment_names: Iterable[str]):
        """Releases each assignment to every student concurrently; returns once all are released."""
        await asyncio.gather(*(self._release_to_all(name) for name in assignment_names))

    def send_reminder(self, assignment_name: str) -> List[str]:
        """
        Sends a final reminder for an assignment and forces submission for
        every student who has it and hasn't been graded yet.

        Returns:
            Names of the students who were reminded
        """
        reminded = [
            student.full_name
            for student in self.students
            if student.send_reminder(assignment_name, observer=self._observer)
        ]
        logger.info(f"Sent {len(reminded)} reminders for {assignment_name}")
        return reminded
