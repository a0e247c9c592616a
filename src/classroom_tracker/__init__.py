from .models.assignment import Assignment, AssignmentStatus
from .observer import Observer
from .student import Student
from .class_list import ClassList

__all__ = ["Assignment", "AssignmentStatus", "Observer", "Student", "ClassList"]
