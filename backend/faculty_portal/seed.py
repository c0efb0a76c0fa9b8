"""
Seed reference data

Creates the faculties, courses and classes the registration form offers.
Faculties and courses have no API for creating them, so a fresh database
needs this before anyone can register.

Optionally creates one demo account per role (password demo123):
- fmg@portal.edu, pl@portal.edu, prl@portal.edu, lecturer@portal.edu
- rep@portal.edu (class representative), student@portal.edu

Run with:
    faculty-portal-seed               # reference data only
    faculty-portal-seed demo-users    # plus demo accounts
    faculty-portal-seed list          # show what is there
"""
import asyncio
import sys
from typing import Dict

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from faculty_portal.core.database import get_session_local, init_db, close_db
from faculty_portal.core.security import get_password_hash
from faculty_portal.models.academic import Faculty, Course, StudentClass
from faculty_portal.models.user import User, UserRole


# faculty name -> [(course code, course name, [(class name, total students)])]
DIRECTORY = {
    "Faculty of Information and Communication Technology": [
        ("DIWA2110", "Web Application Development", [("BSCSM Y2S1", 45), ("BSCIT Y2S1", 40)]),
        ("BIDB2110", "Database Systems", [("BSCSM Y2S1", 45)]),
    ],
    "Faculty of Business and Globalization": [
        ("BBMK1110", "Principles of Marketing", [("BBIB Y1S1", 60)]),
    ],
    "Faculty of Design Innovation": [
        ("DGDS1210", "Graphic Design Studio", [("BAGD Y1S2", 30)]),
    ],
}

DEMO_PASSWORD = "demo123"

DEMO_USERS = [
    {"email": "fmg@portal.edu", "name": "Demo Faculty Manager", "role": UserRole.FMG},
    {"email": "pl@portal.edu", "name": "Demo Program Leader", "role": UserRole.PL},
    {"email": "prl@portal.edu", "name": "Demo Principal Lecturer", "role": UserRole.PRL},
    {"email": "lecturer@portal.edu", "name": "Demo Lecturer", "role": UserRole.LECTURER},
    {"email": "rep@portal.edu", "name": "Demo Class Rep", "role": UserRole.STUDENT, "is_class_rep": True},
    {"email": "student@portal.edu", "name": "Demo Student", "role": UserRole.STUDENT},
]


async def seed_directory(db: AsyncSession) -> Dict[str, int]:
    """Insert missing faculties, courses and classes; existing rows are left alone"""
    created = {"faculties": 0, "courses": 0, "classes": 0}

    for faculty_name, courses in DIRECTORY.items():
        faculty = (await db.execute(
            select(Faculty).where(Faculty.name == faculty_name)
        )).scalar_one_or_none()
        if faculty is None:
            faculty = Faculty(name=faculty_name)
            db.add(faculty)
            await db.flush()
            created["faculties"] += 1

        for code, course_name, classes in courses:
            course = (await db.execute(
                select(Course).where(Course.code == code)
            )).scalar_one_or_none()
            if course is None:
                course = Course(code=code, name=course_name, faculty_id=faculty.id)
                db.add(course)
                await db.flush()
                created["courses"] += 1

            for class_name, total_students in classes:
                existing = (await db.execute(
                    select(StudentClass.id).where(
                        StudentClass.course_id == course.id,
                        StudentClass.name == class_name,
                    )
                )).first()
                if existing is None:
                    db.add(StudentClass(name=class_name, course_id=course.id, total_students=total_students))
                    created["classes"] += 1

    await db.commit()
    return created


async def seed_demo_users(db: AsyncSession) -> int:
    """Demo accounts in the first faculty; students join its first class"""
    faculty = (await db.execute(select(Faculty).order_by(Faculty.id))).scalars().first()
    first_class = (await db.execute(
        select(StudentClass)
        .join(Course, StudentClass.course_id == Course.id)
        .where(Course.faculty_id == faculty.id)
        .order_by(StudentClass.id)
    )).scalars().first()

    created = 0
    for user_data in DEMO_USERS:
        existing = (await db.execute(
            select(User.id).where(User.email == user_data["email"])
        )).first()
        if existing is not None:
            print(f"  Exists:  {user_data['email']} ({user_data['role'].value})")
            continue

        is_student = user_data["role"] == UserRole.STUDENT
        db.add(User(
            email=user_data["email"],
            name=user_data["name"],
            role=user_data["role"],
            hashed_password=get_password_hash(DEMO_PASSWORD),
            faculty_id=faculty.id,
            class_id=first_class.id if is_student else None,
            is_class_rep=user_data.get("is_class_rep", False),
        ))
        created += 1
        print(f"  Created: {user_data['email']} ({user_data['role'].value})")

    await db.commit()
    return created


async def run_seed(with_demo_users: bool = False) -> None:
    print("=" * 50)
    print("Seeding reference data...")
    print("=" * 50)

    await init_db()
    session_factory = get_session_local()
    try:
        async with session_factory() as db:
            created = await seed_directory(db)
            print(f"  Faculties: {created['faculties']} new")
            print(f"  Courses:   {created['courses']} new")
            print(f"  Classes:   {created['classes']} new")

            if with_demo_users:
                print("-" * 50)
                count = await seed_demo_users(db)
                print(f"Demo users created: {count} (password: {DEMO_PASSWORD})")
    finally:
        await close_db()

    print("=" * 50)


async def list_directory() -> None:
    await init_db()
    session_factory = get_session_local()
    try:
        async with session_factory() as db:
            rows = (await db.execute(
                select(Faculty.name, Course.code, Course.name, StudentClass.name, StudentClass.total_students)
                .select_from(Faculty)
                .outerjoin(Course, Course.faculty_id == Faculty.id)
                .outerjoin(StudentClass, StudentClass.course_id == Course.id)
                .order_by(Faculty.name, Course.code, StudentClass.name)
            )).all()
    finally:
        await close_db()

    if not rows:
        print("No faculties found. Run 'faculty-portal-seed' to create them.")
        return

    print(f"{'Faculty':<50} {'Course':<10} {'Class':<14} {'Size':>5}")
    print("-" * 82)
    for faculty_name, code, _, class_name, total in rows:
        print(f"{faculty_name:<50} {code or '-':<10} {class_name or '-':<14} {total if total is not None else '':>5}")


def main() -> None:
    command = sys.argv[1] if len(sys.argv) > 1 else ""
    if command == "list":
        asyncio.run(list_directory())
    else:
        asyncio.run(run_seed(with_demo_users=command == "demo-users"))


if __name__ == "__main__":
    main()
