"""
Integration test: one teaching week through the portal, driven only over HTTP
"""
from datetime import date, timedelta
import pytest
from httpx import AsyncClient


async def register(client, **fields):
    body = {'password': 'weekflow-pass', **fields}
    response = await client.post('/api/v1/auth/register', json=body)
    assert response.status_code == 201, response.text
    return response.json()


def bearer(token):
    return {'Authorization': f'Bearer {token}'}


class TestTeachingWeek:

    @pytest.mark.asyncio
    async def test_report_sign_rate_complain_respond(self, client: AsyncClient, faculty, course, student_class):
        lecturer = await register(client, email='lecturer@example.com', name='Lecturer One',
                                  role='lecturer', faculty_id=faculty.id)
        prl = await register(client, email='prl@example.com', name='PRL One',
                             role='prl', faculty_id=faculty.id)
        rep = await register(client, email='rep@example.com', name='Rep One', role='student',
                             faculty_id=faculty.id, class_id=student_class.id, is_class_rep=True)

        # Lecturer files a report
        created = await client.post('/api/v1/reports', json={
            'class_id': student_class.id,
            'course_id': course.id,
            'week_number': 5,
            'date_of_lecture': (date.today() - timedelta(days=1)).isoformat(),
            'students_present': 33,
            'venue': 'Hall 2',
            'scheduled_time': '09:00',
            'topic_taught': 'REST resource design',
            'learning_outcomes': 'Model resources and verbs',
        }, headers=bearer(lecturer['token']))
        assert created.status_code == 201
        report_id = created.json()['report']['id']

        # Class rep signs it
        signed = await client.post('/api/v1/reports/sign', json={
            'report_id': report_id, 'signature': 'Rep One',
        }, headers=bearer(rep['token']))
        assert signed.json()['report']['status'] == 'signed'

        # Rep rates the lecture
        rated = await client.post('/api/v1/ratings', json={
            'report_id': report_id, 'rating': 5, 'comment': 'Great session',
        }, headers=bearer(rep['token']))
        assert rated.status_code == 201

        # PRL monitoring shows the signed report with its rating
        monitoring = await client.get('/api/v1/monitoring', headers=bearer(prl['token']))
        entry = monitoring.json()[0]
        assert (entry['id'], entry['status'], entry['rating_count'], entry['average_rating']) == (report_id, 'signed', 1, 5.0)

        # Signed report appears on the landing page
        public = await client.get('/api/v1/public/reports')
        assert [r['id'] for r in public.json()] == [report_id]

        # Rep complains about the lecturer; PRL answers
        filed = await client.post('/api/v1/complaints', json={
            'complaint_against_id': lecturer['user']['id'],
            'report_id': report_id,
            'complaint_text': 'Slides were not shared afterwards',
        }, headers=bearer(rep['token']))
        complaint_id = filed.json()['complaint']['id']

        queue = await client.get('/api/v1/complaints/for-response', headers=bearer(prl['token']))
        assert [c['id'] for c in queue.json()] == [complaint_id]

        answered = await client.post('/api/v1/complaints/respond', json={
            'complaint_id': complaint_id, 'response_text': 'Slides are now on the portal',
        }, headers=bearer(prl['token']))
        assert answered.json()['complaint']['status'] == 'resolved'

        mine = await client.get('/api/v1/complaints', headers=bearer(rep['token']))
        assert mine.json()[0]['responder_name'] == 'PRL One'

        stats = await client.get('/api/v1/public/stats')
        assert stats.json()['totalReports'] == 1
        assert stats.json()['totalStaff'] == 2
