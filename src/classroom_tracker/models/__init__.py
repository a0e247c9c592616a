from .assignment import Assignment, AssignmentStatus

__all__ = ["Assignment", "AssignmentStatus"]
