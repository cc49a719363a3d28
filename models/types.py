# models/types.py

"""
Holds TypeVar definition for simplifying type checks.
"""

from typing import TypeVar

from .course import Course, Group
from .lesson import Lesson
from .student import Student
from .user import Teacher, TeacherLoad, User

RecordType = TypeVar(
    "RecordType", Course, Group, Lesson, Student, Teacher, TeacherLoad, User
)
