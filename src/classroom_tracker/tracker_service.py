import argparse
import asyncio
import logging
import re
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple
from .class_list import ClassList
from .observer import Observer
from .scheduler import DeferredScheduler, default_scheduler
from .student import Student
from .utils.config import POLL_INTERVAL, LOG_LEVEL

logger = logging.getLogger(__name__)

STUDENT_PATTERN = re.compile(r'^\s*(?P<name>[^<]+?)\s*<(?P<email>[^>]+)>\s*$')


class TrackerService:
    """Runs a simulated term for a class list, driving the deferred callbacks until none are left."""

    def __init__(self, class_list: ClassList, scheduler=None):
        self.class_list = class_list
        self.scheduler = scheduler if scheduler is not None else default_scheduler

    async def run_until_idle(self):
        while self.scheduler.pending:
            self.scheduler.run_pending()
            idle = self.scheduler.idle_seconds
            await asyncio.sleep(POLL_INTERVAL if idle is None else max(0, min(POLL_INTERVAL, idle)))

    async def run_term(self, assignment_names: List[str], remind: Optional[str] = None) -> Dict[str, Optional[float]]:
        """
        Releases the assignments, has every student start on them and waits for all grades.

        Args:
            assignment_names: Assignments to release
            remind: Optional assignment to send a final reminder for right after work starts

        Returns:
            Dict mapping student names to their overall grade
        """
        logger.info(f"Starting term at {datetime.now()}")
        await self.class_list.release_assignments_parallel(assignment_names)

        for student in self.class_list.students:
            for name in assignment_names:
                student.start_working(name)

        if remind:
            self.class_list.send_reminder(remind)

        await self.run_until_idle()
        logger.info(f"Term completed at {datetime.now()}")
        return {student.full_name: student.get_grade() for student in self.class_list.students}


def parse_student(value: str) -> Tuple[str, str]:
    """Splits 'Full Name <email>' into its name and email."""
    match = STUDENT_PATTERN.match(value)
    if not match:
        raise argparse.ArgumentTypeError(f"Expected 'Full Name <email>', got {value!r}")
    return match.group('name'), match.group('email')


def parse_args(argv: Optional[Iterable[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description='Simulate a class working through its assignments.')
    parser.add_argument(
        '--student', dest='students', action='append', required=True, metavar='"NAME <EMAIL>"',
        help='Student to enroll; repeat for each student.'
    )
    parser.add_argument(
        '--assignment', dest='assignments', action='append', required=True,
        help='Assignment to release; repeat for each assignment.'
    )
    parser.add_argument(
        '--remind', type=str, default=None,
        help='Assignment to send a final reminder for once work has started.'
    )
    parser.add_argument(
        '--log-level', type=str, choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        default=LOG_LEVEL, help='Set the logging level.'
    )
    return parser.parse_args(argv)


def main(argv: Optional[Iterable[str]] = None):
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))

    observer = Observer()
    scheduler = DeferredScheduler()
    class_list = ClassList(observer)

    for value in args.students:
        try:
            full_name, email = parse_student(value)
        except argparse.ArgumentTypeError as e:
            logger.error(str(e))
            return 2
        class_list.add_student(Student(full_name, email, observer, scheduler))

    service = TrackerService(class_list, scheduler)
    report = asyncio.run(service.run_term(args.assignments, remind=args.remind))

    for name in args.assignments:
        outstanding = class_list.find_outstanding_assignments(name)
        print(f"Outstanding for {name}: {', '.join(outstanding) if outstanding else 'none'}")

    for student_name, grade in report.items():
        print(f"{student_name}: {'no grade' if grade is None else f'{grade:.1f}'}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
