"""
Faculty Reporting Portal - Test Configuration and Fixtures
"""
import os
import tempfile
from datetime import date, timedelta
from typing import AsyncGenerator, Callable, Dict
import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession
from faker import Faker

# Set testing environment before the application reads its settings
_TEST_DIR = tempfile.mkdtemp(prefix='faculty-portal-tests-')
os.environ['ENVIRONMENT'] = 'testing'
os.environ['DATABASE_URL'] = f'sqlite+aiosqlite:///{_TEST_DIR}/test.db'
os.environ['JWT_SECRET_KEY'] = 'test-jwt-secret-key-for-testing'
os.environ['RATE_LIMIT_ENABLED'] = 'false'
os.environ['BCRYPT_ROUNDS'] = '4'
os.environ['LOG_FILE'] = ''
os.environ['UPLOAD_DIR'] = os.path.join(_TEST_DIR, 'uploads')

from faculty_portal.main import app
from faculty_portal.core.database import Base, get_db, get_engine, get_session_local
from faculty_portal.core.security import get_password_hash, create_user_token
from faculty_portal.models import (
    Faculty,
    Course,
    StudentClass,
    User,
    UserRole,
    Report,
    ReportStatus,
)

fake = Faker()

TEST_PASSWORD = 'testpassword123'


@pytest.fixture(scope='function')
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database for each test and a session to seed it"""
    engine = get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with get_session_local()() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Test client; every request gets its own session like in production"""
    async def override_get_db():
        async with get_session_local()() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------- academic directory ----------

@pytest.fixture
async def faculty(db_session: AsyncSession) -> Faculty:
    faculty = Faculty(name='Faculty of Information Technology')
    db_session.add(faculty)
    await db_session.commit()
    await db_session.refresh(faculty)
    return faculty


@pytest.fixture
async def other_faculty(db_session: AsyncSession) -> Faculty:
    faculty = Faculty(name='Faculty of Business')
    db_session.add(faculty)
    await db_session.commit()
    await db_session.refresh(faculty)
    return faculty


@pytest.fixture
async def course(db_session: AsyncSession, faculty: Faculty) -> Course:
    course = Course(name='Web Application Development', code='DIWA2110', faculty_id=faculty.id)
    db_session.add(course)
    await db_session.commit()
    await db_session.refresh(course)
    return course


@pytest.fixture
async def other_course(db_session: AsyncSession, other_faculty: Faculty) -> Course:
    course = Course(name='Principles of Marketing', code='BBMK1110', faculty_id=other_faculty.id)
    db_session.add(course)
    await db_session.commit()
    await db_session.refresh(course)
    return course


@pytest.fixture
async def student_class(db_session: AsyncSession, course: Course) -> StudentClass:
    student_class = StudentClass(name='BSCSM Y2S1', course_id=course.id, total_students=40)
    db_session.add(student_class)
    await db_session.commit()
    await db_session.refresh(student_class)
    return student_class


@pytest.fixture
async def other_class(db_session: AsyncSession, course: Course) -> StudentClass:
    student_class = StudentClass(name='BSCIT Y2S1', course_id=course.id, total_students=25)
    db_session.add(student_class)
    await db_session.commit()
    await db_session.refresh(student_class)
    return student_class


# ---------- users ----------

@pytest.fixture
def make_user(db_session: AsyncSession, faculty: Faculty) -> Callable:
    """Factory for users; defaults to a student of the main faculty"""
    async def _make(
        role: UserRole = UserRole.STUDENT,
        faculty_id: int = None,
        class_id: int = None,
        is_class_rep: bool = False,
        email: str = None,
    ) -> User:
        user = User(
            email=email or fake.unique.email(),
            hashed_password=get_password_hash(TEST_PASSWORD),
            name=fake.name(),
            role=role,
            faculty_id=faculty_id or faculty.id,
            class_id=class_id,
            is_class_rep=is_class_rep,
        )
        db_session.add(user)
        await db_session.commit()
        await db_session.refresh(user)
        return user

    return _make


@pytest.fixture
async def lecturer(make_user) -> User:
    return await make_user(UserRole.LECTURER)


@pytest.fixture
async def prl(make_user) -> User:
    return await make_user(UserRole.PRL)


@pytest.fixture
async def pl(make_user) -> User:
    return await make_user(UserRole.PL)


@pytest.fixture
async def fmg(make_user) -> User:
    return await make_user(UserRole.FMG)


@pytest.fixture
async def student(make_user, student_class: StudentClass) -> User:
    return await make_user(UserRole.STUDENT, class_id=student_class.id)


@pytest.fixture
async def class_rep(make_user, student_class: StudentClass) -> User:
    return await make_user(UserRole.STUDENT, class_id=student_class.id, is_class_rep=True)


@pytest.fixture
def auth_headers() -> Callable[[User], Dict[str, str]]:
    """Bearer header for any user"""
    def _headers(user: User) -> Dict[str, str]:
        return {'Authorization': f'Bearer {create_user_token(user.id)}'}

    return _headers


# ---------- reports ----------

@pytest.fixture
def report_payload(student_class: StudentClass, course: Course) -> Callable[..., dict]:
    def _payload(**overrides) -> dict:
        data = {
            'class_id': student_class.id,
            'course_id': course.id,
            'week_number': 3,
            'date_of_lecture': (date.today() - timedelta(days=1)).isoformat(),
            'students_present': 30,
            'venue': 'Hall 6',
            'scheduled_time': '10:30',
            'topic_taught': 'Async request handling',
            'learning_outcomes': 'Students can write async endpoints',
            'recommendations': 'More lab time',
        }
        data.update(overrides)
        return data

    return _payload


@pytest.fixture
def make_report(db_session: AsyncSession, student_class: StudentClass, course: Course) -> Callable:
    """Insert a report directly, bypassing the API"""
    async def _make(lecturer: User, status: ReportStatus = ReportStatus.PENDING, **overrides) -> Report:
        fields = dict(
            faculty_id=lecturer.faculty_id,
            class_id=student_class.id,
            course_id=course.id,
            lecturer_id=lecturer.id,
            week_number=1,
            date_of_lecture=date.today() - timedelta(days=2),
            students_present=20,
            venue='Room 1',
            scheduled_time='08:30',
            topic_taught=fake.sentence(nb_words=4),
            learning_outcomes='Understanding of the topic',
            status=status,
        )
        fields.update(overrides)
        report = Report(**fields)
        db_session.add(report)
        await db_session.commit()
        await db_session.refresh(report)
        return report

    return _make
