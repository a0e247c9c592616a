import argparse
import unittest
from unittest.mock import patch, MagicMock, AsyncMock, PropertyMock
from classroom_tracker.class_list import ClassList
from classroom_tracker.scheduler import DeferredScheduler
from classroom_tracker.student import Student
from classroom_tracker.tracker_service import TrackerService, main, parse_student


@patch('classroom_tracker.tracker_service.POLL_INTERVAL', 0)
@patch('classroom_tracker.student.GRADING_DELAY', 0.01)
@patch('classroom_tracker.student.WORK_DELAY', 0.01)
class TestTrackerService(unittest.IsolatedAsyncioTestCase):

    async def test_run_term_grades_every_assignment(self):
        scheduler = DeferredScheduler()
        observer = MagicMock()
        class_list = ClassList(observer)
        for name in ("Alice", "Bob"):
            class_list.add_student(Student(name, f"{name}@example.com", observer, scheduler))

        report = await TrackerService(class_list, scheduler).run_term(["HW1", "HW2"], remind="HW2")

        self.assertEqual(set(report), {"Alice", "Bob"})
        self.assertEqual(scheduler.pending, 0)
        for student in class_list.students:
            for name in ("HW1", "HW2"):
                self.assertIn(student.get_assignment_status(name), ("Pass", "Fail"))
            self.assertIsNotNone(report[student.full_name])

    async def test_run_term_with_default_schedulers(self):
        class_list = ClassList()
        class_list.add_student(Student("Alice", "alice@example.com"))

        report = await TrackerService(class_list).run_term(["HW1"])

        self.assertIn(class_list.students[0].get_assignment_status("HW1"), ("Pass", "Fail"))
        self.assertIsNotNone(report["Alice"])

    async def test_run_until_idle_returns_immediately_without_work(self):
        scheduler = DeferredScheduler()
        await TrackerService(ClassList(), scheduler).run_until_idle()
        self.assertEqual(scheduler.pending, 0)


@patch('classroom_tracker.tracker_service.POLL_INTERVAL', 0.1)
class TestRunLoop(unittest.IsolatedAsyncioTestCase):

    async def test_sleeps_only_until_next_callback(self):
        scheduler = MagicMock()
        type(scheduler).pending = PropertyMock(side_effect=[1, 0])
        scheduler.idle_seconds = 0.02

        with patch('classroom_tracker.tracker_service.asyncio.sleep', new_callable=AsyncMock) as mock_sleep:
            await TrackerService(ClassList(), scheduler).run_until_idle()

        scheduler.run_pending.assert_called_once()
        mock_sleep.assert_awaited_once_with(0.02)

    async def test_sleeps_poll_interval_when_queue_empties(self):
        scheduler = MagicMock()
        type(scheduler).pending = PropertyMock(side_effect=[1, 0])
        scheduler.idle_seconds = None

        with patch('classroom_tracker.tracker_service.asyncio.sleep', new_callable=AsyncMock) as mock_sleep:
            await TrackerService(ClassList(), scheduler).run_until_idle()

        mock_sleep.assert_awaited_once_with(0.1)


class TestCommandLine(unittest.TestCase):

    def test_parse_student(self):
        self.assertEqual(parse_student("Ada Lovelace <ada@example.com>"), ("Ada Lovelace", "ada@example.com"))

    def test_parse_student_rejects_missing_email(self):
        with self.assertRaises(argparse.ArgumentTypeError):
            parse_student("Ada Lovelace")

    @patch('builtins.print')
    @patch('classroom_tracker.tracker_service.POLL_INTERVAL', 0)
    @patch('classroom_tracker.student.GRADING_DELAY', 0.01)
    @patch('classroom_tracker.student.WORK_DELAY', 0.01)
    def test_main_prints_report(self, mock_print):
        exit_code = main([
            '--student', 'Ada Lovelace <ada@example.com>',
            '--student', 'Grace Hopper <grace@example.com>',
            '--assignment', 'HW1',
            '--remind', 'HW1',
        ])

        self.assertEqual(exit_code, 0)
        printed = [call.args[0] for call in mock_print.call_args_list]
        self.assertIn("Outstanding for HW1: none", printed)
        self.assertTrue(any(line.startswith("Ada Lovelace: ") for line in printed))
        self.assertTrue(any("has submitted HW1" in line for line in printed))

    @patch('builtins.print')
    def test_main_rejects_bad_student(self, mock_print):
        self.assertEqual(main(['--student', 'nobody', '--assignment', 'HW1']), 2)


if __name__ == '__main__':
    unittest.main()
