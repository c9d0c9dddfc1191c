# models/types.py

"""
Holds TypeVar definition for simplifying type checks.
"""

from typing import TypeVar

from .lesson import Lesson
from .module_class import ModuleClass
from .student import Student

RecordType = TypeVar("RecordType", Student, ModuleClass, Lesson)
