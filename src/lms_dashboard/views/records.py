"""UI records: display-ready rows built from API DTOs.

Every record keeps `api_id` (and `api_user_id` when a linked user exists)
so edit/delete flows address the server resource, not the display data.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from lms_dashboard.views.roles import Role


@dataclass
class UserRecord:
    id: str
    name: str
    email: str
    role: Role
    status: str
    phone: str
    department: str
    join_date: str
    verified: bool
    avatar: str
    api_id: str

    @property
    def role_label(self) -> str:
        return self.role.label


@dataclass
class CourseRecord:
    id: str
    title: str
    code: str
    description: str
    instructor: str
    category: str
    level: str
    duration: str
    students: int
    max_students: int
    rating: float
    price: float
    status: str
    start_date: str
    end_date: str
    lessons: int
    completed_lessons: int
    thumbnail: str
    teacher_id: str
    api_id: str


@dataclass
class StudentRecord:
    id: str
    name: str
    email: str
    avatar: str
    student_id: str
    semester: int
    year: str
    section: str
    department: str
    status: str
    progress: float
    attendance: float
    gpa: float
    join_date: str
    courses: list[str] = field(default_factory=list)
    api_id: str = ""
    api_user_id: str = ""


@dataclass
class TeacherRecord:
    id: str
    name: str
    email: str
    avatar: str
    specialization: str
    contact: str
    status: str
    is_active: bool
    courses: int
    students: int
    rating: float
    experience: str
    api_id: str = ""
    api_user_id: str = ""


@dataclass
class ClassRecord:
    id: str
    subject: str
    class_code: str
    description: str
    schedule: str
    room: str
    grade: str
    section: str
    status: str
    total_students: int
    api_id: str = ""


@dataclass
class AssignmentRecord:
    id: str
    title: str
    subject: str
    course_id: str
    description: str
    due_date: str
    status: str
    submissions: int
    total_students: int
    api_id: str = ""


@dataclass
class SubmissionRecord:
    id: str
    assignment_id: str
    assignment_title: str
    course_title: str
    student_id: str
    student_name: str
    enrollment_no: str
    grade: float
    is_graded: bool
    feedback: str
    submitted_at: str
    status: str
    api_id: str = ""


@dataclass
class RosterRecord:
    """A student as seen from a teacher's class roster."""

    id: str
    name: str
    email: str
    avatar: str
    student_id: str
    semester: int
    year: str
    section: str
    status: str
    grade: str
    attendance: float
    progress: float
    average_grade: float
    completed_assignments: int
    total_assignments: int
    courses: list[str] = field(default_factory=list)
    last_active: str = ""
    api_id: str = ""
    api_user_id: str = ""


@dataclass
class AttendanceRecord:
    id: str
    student_id: str
    student_name: str
    course_id: str
    course_title: str
    date: str
    status: str
    api_id: str = ""


@dataclass
class StudentAssignmentRecord:
    id: str
    title: str
    course_title: str
    due_date: str
    points: int
    status: str
    grade: float
    is_graded: bool
    submission_id: str = ""
    api_id: str = ""


@dataclass
class StudentCourseRecord:
    id: str
    title: str
    code: str
    description: str
    instructor: str
    category: str
    level: str
    progress: float
    status: str
    api_id: str = ""
