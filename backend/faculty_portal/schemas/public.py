from pydantic import BaseModel
from typing import Dict, List


class PortalStats(BaseModel):
    """Camel-cased keys are what the landing page reads"""
    totalFaculties: int
    totalCourses: int
    totalClasses: int
    totalReports: int
    totalStaff: int
    totalStudents: int


class FacultySummary(BaseModel):
    id: int
    name: str
    course_count: int
    class_count: int
    staff_count: int
    student_count: int


class HierarchyMember(BaseModel):
    id: int
    name: str
    email: str
    position: str


class FacultyHierarchy(BaseModel):
    faculty_name: str
    total_staff: int = 0
    fmg: List[HierarchyMember] = []
    pl: List[HierarchyMember] = []
    prl: List[HierarchyMember] = []
    lecturer: List[HierarchyMember] = []


class FacultyStaffCount(BaseModel):
    total: int = 0
    breakdown: Dict[str, int] = {}
