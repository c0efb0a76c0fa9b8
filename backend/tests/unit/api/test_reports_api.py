"""
Unit Tests for Report API Endpoints
Tests for: creation rules, role-filtered listing, class representative signing
"""
import pytest
from datetime import date, timedelta
from httpx import AsyncClient

from faculty_portal.models import UserRole, ReportStatus


class TestCreateReport:

    @pytest.mark.asyncio
    async def test_lecturer_creates_pending_report(self, client: AsyncClient, lecturer, report_payload, auth_headers):
        response = await client.post('/api/v1/reports', json=report_payload(), headers=auth_headers(lecturer))

        assert response.status_code == 201
        data = response.json()
        assert data['message'] == 'Report created successfully'
        report = data['report']
        assert report['status'] == 'pending'
        assert report['lecturer_id'] == lecturer.id
        assert report['faculty_id'] == lecturer.faculty_id
        assert report['student_signature'] is None
        assert report['signed_at'] is None

    @pytest.mark.asyncio
    async def test_other_staff_roles_can_report(self, client: AsyncClient, prl, report_payload, auth_headers):
        response = await client.post('/api/v1/reports', json=report_payload(), headers=auth_headers(prl))

        assert response.status_code == 201

    @pytest.mark.asyncio
    async def test_student_cannot_create(self, client: AsyncClient, class_rep, report_payload, auth_headers):
        response = await client.post('/api/v1/reports', json=report_payload(), headers=auth_headers(class_rep))

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_attendance_cannot_exceed_class_size(self, client: AsyncClient, lecturer, report_payload, auth_headers):
        response = await client.post(
            '/api/v1/reports', json=report_payload(students_present=41), headers=auth_headers(lecturer)
        )

        assert response.status_code == 400
        assert 'cannot exceed total students' in response.json()['detail']

    @pytest.mark.asyncio
    async def test_full_attendance_allowed(self, client: AsyncClient, lecturer, report_payload, auth_headers):
        response = await client.post(
            '/api/v1/reports', json=report_payload(students_present=40), headers=auth_headers(lecturer)
        )

        assert response.status_code == 201

    @pytest.mark.asyncio
    async def test_future_date_rejected(self, client: AsyncClient, lecturer, report_payload, auth_headers):
        tomorrow = (date.today() + timedelta(days=1)).isoformat()

        response = await client.post(
            '/api/v1/reports', json=report_payload(date_of_lecture=tomorrow), headers=auth_headers(lecturer)
        )

        assert response.status_code == 400
        assert response.json()['detail'] == 'Date of lecture cannot be in the future'

    @pytest.mark.asyncio
    async def test_class_must_belong_to_course(self, client: AsyncClient, lecturer, other_course, report_payload, auth_headers):
        response = await client.post(
            '/api/v1/reports', json=report_payload(course_id=other_course.id), headers=auth_headers(lecturer)
        )

        assert response.status_code == 400
        assert response.json()['error']['details']['field'] == 'class_id'

    @pytest.mark.asyncio
    async def test_unknown_class(self, client: AsyncClient, lecturer, report_payload, auth_headers):
        response = await client.post(
            '/api/v1/reports', json=report_payload(class_id=999), headers=auth_headers(lecturer)
        )

        assert response.status_code == 404
        assert response.json()['detail'] == 'Class not found'

    @pytest.mark.asyncio
    async def test_negative_week_rejected(self, client: AsyncClient, lecturer, report_payload, auth_headers):
        response = await client.post(
            '/api/v1/reports', json=report_payload(week_number=0), headers=auth_headers(lecturer)
        )

        assert response.status_code == 400


class TestListReports:

    @pytest.mark.asyncio
    async def test_lecturer_sees_only_own(self, client: AsyncClient, make_user, make_report, lecturer, auth_headers):
        colleague = await make_user(UserRole.LECTURER)
        mine = await make_report(lecturer)
        await make_report(colleague)

        response = await client.get('/api/v1/reports', headers=auth_headers(lecturer))

        assert response.status_code == 200
        assert [r['id'] for r in response.json()] == [mine.id]

    @pytest.mark.asyncio
    async def test_student_sees_own_class(self, client: AsyncClient, make_report, lecturer, student, other_class, auth_headers):
        in_class = await make_report(lecturer)
        await make_report(lecturer, class_id=other_class.id)

        response = await client.get('/api/v1/reports', headers=auth_headers(student))

        assert [r['id'] for r in response.json()] == [in_class.id]

    @pytest.mark.asyncio
    async def test_prl_sees_own_faculty(self, client: AsyncClient, make_user, make_report, other_faculty, prl, auth_headers):
        ours = await make_report(await make_user(UserRole.LECTURER))
        await make_report(await make_user(UserRole.LECTURER, faculty_id=other_faculty.id))

        response = await client.get('/api/v1/reports', headers=auth_headers(prl))

        assert [r['id'] for r in response.json()] == [ours.id]

    @pytest.mark.asyncio
    async def test_pl_and_fmg_see_everything(self, client: AsyncClient, make_user, make_report, other_faculty, pl, fmg, auth_headers):
        await make_report(await make_user(UserRole.LECTURER))
        await make_report(await make_user(UserRole.LECTURER, faculty_id=other_faculty.id))

        for viewer in (pl, fmg):
            response = await client.get('/api/v1/reports', headers=auth_headers(viewer))
            assert len(response.json()) == 2

    @pytest.mark.asyncio
    async def test_listing_includes_names_newest_first(self, client: AsyncClient, make_report, lecturer, student_class, course, auth_headers):
        first = await make_report(lecturer)
        second = await make_report(lecturer)

        response = await client.get('/api/v1/reports', headers=auth_headers(lecturer))
        data = response.json()

        assert [r['id'] for r in data] == [second.id, first.id]
        assert data[0]['class_name'] == student_class.name
        assert data[0]['course_code'] == course.code
        assert data[0]['lecturer_name'] == lecturer.name


class TestSignReport:

    @pytest.mark.asyncio
    async def test_class_rep_signs_pending_report(self, client: AsyncClient, make_report, lecturer, class_rep, auth_headers):
        report = await make_report(lecturer)

        response = await client.post('/api/v1/reports/sign', json={
            'report_id': report.id,
            'signature': 'data:image/png;base64,iVBORw0KGgo=',
        }, headers=auth_headers(class_rep))

        assert response.status_code == 200
        signed = response.json()['report']
        assert signed['status'] == 'signed'
        assert signed['student_signature'] == 'data:image/png;base64,iVBORw0KGgo='
        assert signed['signed_at'] is not None

    @pytest.mark.asyncio
    async def test_report_signed_only_once(self, client: AsyncClient, make_report, lecturer, class_rep, auth_headers):
        report = await make_report(lecturer)
        body = {'report_id': report.id, 'signature': 'sig'}

        first = await client.post('/api/v1/reports/sign', json=body, headers=auth_headers(class_rep))
        second = await client.post('/api/v1/reports/sign', json={**body, 'signature': 'other'}, headers=auth_headers(class_rep))

        assert first.status_code == 200
        assert second.status_code == 400
        assert second.json()['detail'] == 'Report has already been signed'

        listing = await client.get('/api/v1/reports', headers=auth_headers(class_rep))
        assert listing.json()[0]['student_signature'] == 'sig'

    @pytest.mark.asyncio
    async def test_reviewed_report_cannot_be_signed(self, client: AsyncClient, make_report, lecturer, class_rep, auth_headers):
        report = await make_report(lecturer, status=ReportStatus.REVIEWED)

        response = await client.post('/api/v1/reports/sign', json={
            'report_id': report.id, 'signature': 'sig',
        }, headers=auth_headers(class_rep))

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_regular_student_cannot_sign(self, client: AsyncClient, make_report, lecturer, student, auth_headers):
        report = await make_report(lecturer)

        response = await client.post('/api/v1/reports/sign', json={
            'report_id': report.id, 'signature': 'sig',
        }, headers=auth_headers(student))

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_rep_of_other_class_cannot_sign(self, client: AsyncClient, make_user, make_report, lecturer, other_class, auth_headers):
        report = await make_report(lecturer)
        other_rep = await make_user(UserRole.STUDENT, class_id=other_class.id, is_class_rep=True)

        response = await client.post('/api/v1/reports/sign', json={
            'report_id': report.id, 'signature': 'sig',
        }, headers=auth_headers(other_rep))

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_lecturer_cannot_sign(self, client: AsyncClient, make_report, lecturer, auth_headers):
        report = await make_report(lecturer)

        response = await client.post('/api/v1/reports/sign', json={
            'report_id': report.id, 'signature': 'sig',
        }, headers=auth_headers(lecturer))

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_unknown_report(self, client: AsyncClient, class_rep, auth_headers):
        response = await client.post('/api/v1/reports/sign', json={
            'report_id': 999, 'signature': 'sig',
        }, headers=auth_headers(class_rep))

        assert response.status_code == 404
        assert response.json()['detail'] == 'Report not found'
