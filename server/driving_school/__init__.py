"""
Driving school scheduling API.

Students, instructors, lessons and reports kept in process memory.
"""

__version__ = "1.0.0"
