"""
Unit Tests for System (choice lists) and Public (landing page) Endpoints
"""
import pytest
from httpx import AsyncClient

from faculty_portal.models import UserRole, ReportStatus


class TestSystemChoiceLists:

    @pytest.mark.asyncio
    async def test_faculties_public(self, client: AsyncClient, faculty, other_faculty):
        response = await client.get('/api/v1/system/faculties')

        assert response.status_code == 200
        assert [f['name'] for f in response.json()] == ['Faculty of Business', 'Faculty of Information Technology']

    @pytest.mark.asyncio
    async def test_courses_public_with_faculty_name(self, client: AsyncClient, course, other_course):
        response = await client.get('/api/v1/system/courses')

        data = response.json()
        assert [c['code'] for c in data] == ['BBMK1110', 'DIWA2110']
        assert data[1]['faculty_name'] == 'Faculty of Information Technology'

    @pytest.mark.asyncio
    async def test_classes_public(self, client: AsyncClient, student_class, other_class):
        response = await client.get('/api/v1/system/classes')

        assert {c['id'] for c in response.json()} == {student_class.id, other_class.id}

    @pytest.mark.asyncio
    async def test_class_detail_requires_auth(self, client: AsyncClient, student_class):
        response = await client.get(f'/api/v1/system/classes/{student_class.id}')

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_class_detail(self, client: AsyncClient, student_class, lecturer, auth_headers):
        response = await client.get(f'/api/v1/system/classes/{student_class.id}', headers=auth_headers(lecturer))

        assert response.status_code == 200
        assert response.json()['total_students'] == 40

    @pytest.mark.asyncio
    async def test_class_detail_not_found(self, client: AsyncClient, lecturer, auth_headers):
        response = await client.get('/api/v1/system/classes/999', headers=auth_headers(lecturer))

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_users_by_role_within_faculty(self, client: AsyncClient, make_user, other_faculty, lecturer, pl, auth_headers):
        await make_user(UserRole.LECTURER, faculty_id=other_faculty.id)

        response = await client.get('/api/v1/system/users/lecturer', headers=auth_headers(pl))

        assert [u['id'] for u in response.json()] == [lecturer.id]

    @pytest.mark.asyncio
    async def test_users_by_unknown_role(self, client: AsyncClient, pl, auth_headers):
        response = await client.get('/api/v1/system/users/admin', headers=auth_headers(pl))

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_current_user_profile(self, client: AsyncClient, student, student_class, faculty, auth_headers):
        response = await client.get('/api/v1/system/user/profile', headers=auth_headers(student))

        data = response.json()
        assert data['id'] == student.id
        assert data['faculty_name'] == faculty.name
        assert data['class_name'] == student_class.name


class TestPublic:

    @pytest.mark.asyncio
    async def test_stats(self, client: AsyncClient, make_report, student_class, lecturer, prl, student, class_rep):
        await make_report(lecturer, status=ReportStatus.SIGNED)
        await make_report(lecturer)

        response = await client.get('/api/v1/public/stats')

        assert response.status_code == 200
        assert response.json() == {
            'totalFaculties': 1,
            'totalCourses': 1,
            'totalClasses': 1,
            'totalReports': 1,
            'totalStaff': 2,
            'totalStudents': 2,
        }

    @pytest.mark.asyncio
    async def test_faculty_summaries(self, client: AsyncClient, student_class, other_faculty, lecturer, student):
        response = await client.get('/api/v1/public/faculties')

        data = {f['name']: f for f in response.json()}
        it = data['Faculty of Information Technology']
        assert (it['course_count'], it['class_count'], it['staff_count'], it['student_count']) == (1, 1, 1, 1)
        assert data['Faculty of Business']['course_count'] == 0

    @pytest.mark.asyncio
    async def test_staff_hierarchy(self, client: AsyncClient, faculty, lecturer, prl, pl, fmg, student):
        response = await client.get('/api/v1/public/staff-hierarchy')

        bucket = response.json()[str(faculty.id)]
        assert bucket['total_staff'] == 4
        assert bucket['fmg'][0]['position'] == 'Faculty Management'
        assert bucket['pl'][0]['id'] == pl.id
        assert bucket['lecturer'][0]['id'] == lecturer.id

    @pytest.mark.asyncio
    async def test_staff_count(self, client: AsyncClient, make_user, faculty, lecturer, prl):
        await make_user(UserRole.LECTURER)

        response = await client.get('/api/v1/public/staff-count')

        bucket = response.json()[str(faculty.id)]
        assert bucket['total'] == 3
        assert bucket['breakdown'] == {'lecturer': 2, 'prl': 1}

    @pytest.mark.asyncio
    async def test_latest_signed_reports(self, client: AsyncClient, make_report, lecturer):
        signed = [await make_report(lecturer, status=ReportStatus.SIGNED) for _ in range(12)]
        await make_report(lecturer)

        response = await client.get('/api/v1/public/reports')

        data = response.json()
        assert len(data) == 10
        assert data[0]['id'] == signed[-1].id
        assert all(r['status'] == 'signed' for r in data)
