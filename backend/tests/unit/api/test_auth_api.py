"""
Unit Tests for Authentication API Endpoints
"""
import pytest
from httpx import AsyncClient
from faker import Faker

from faculty_portal.core.security import create_user_token

fake = Faker()


class TestUserRegistration:
    """Test user registration endpoint"""

    def payload(self, faculty_id, **overrides):
        data = {
            'email': fake.unique.email(),
            'password': 'securePassword123',
            'name': fake.name(),
            'role': 'lecturer',
            'faculty_id': faculty_id,
        }
        data.update(overrides)
        return data

    @pytest.mark.asyncio
    async def test_register_success(self, client: AsyncClient, faculty):
        user_data = self.payload(faculty.id)

        response = await client.post('/api/v1/auth/register', json=user_data)

        assert response.status_code == 201
        data = response.json()
        assert data['message'] == 'User created successfully'
        assert data['token']
        assert data['user']['email'] == user_data['email']
        assert data['user']['role'] == 'lecturer'
        assert 'hashed_password' not in data['user']

    @pytest.mark.asyncio
    async def test_register_class_rep(self, client: AsyncClient, faculty, student_class):
        user_data = self.payload(faculty.id, role='student', class_id=student_class.id, is_class_rep=True)

        response = await client.post('/api/v1/auth/register', json=user_data)

        assert response.status_code == 201
        user = response.json()['user']
        assert user['is_class_rep'] is True
        assert user['class_id'] == student_class.id

    @pytest.mark.asyncio
    async def test_class_rep_flag_ignored_for_staff(self, client: AsyncClient, faculty, student_class):
        user_data = self.payload(faculty.id, role='prl', class_id=student_class.id, is_class_rep=True)

        response = await client.post('/api/v1/auth/register', json=user_data)

        assert response.status_code == 201
        user = response.json()['user']
        assert user['is_class_rep'] is False
        assert user['class_id'] is None

    @pytest.mark.asyncio
    async def test_class_rep_flag_ignored_without_class(self, client: AsyncClient, faculty):
        user_data = self.payload(faculty.id, role='student', is_class_rep=True)

        response = await client.post('/api/v1/auth/register', json=user_data)

        assert response.status_code == 201
        assert response.json()['user']['is_class_rep'] is False

    @pytest.mark.asyncio
    async def test_register_duplicate_email(self, client: AsyncClient, faculty, lecturer):
        user_data = self.payload(faculty.id, email=lecturer.email)

        response = await client.post('/api/v1/auth/register', json=user_data)

        assert response.status_code == 400
        assert response.json()['detail'] == 'User already exists with this email'
        assert response.json()['error']['code'] == 'CONFLICT'

    @pytest.mark.asyncio
    async def test_register_unknown_faculty(self, client: AsyncClient, faculty):
        response = await client.post('/api/v1/auth/register', json=self.payload(faculty.id + 999))

        assert response.status_code == 400
        assert response.json()['detail'] == 'Invalid faculty selected'

    @pytest.mark.asyncio
    async def test_register_unknown_class(self, client: AsyncClient, faculty):
        user_data = self.payload(faculty.id, role='student', class_id=999)

        response = await client.post('/api/v1/auth/register', json=user_data)

        assert response.status_code == 400
        assert response.json()['detail'] == 'Invalid class selected'

    @pytest.mark.asyncio
    async def test_register_invalid_email(self, client: AsyncClient, faculty):
        response = await client.post('/api/v1/auth/register', json=self.payload(faculty.id, email='not-an-email'))

        assert response.status_code == 400
        assert response.json()['error']['code'] == 'VALIDATION_ERROR'

    @pytest.mark.asyncio
    async def test_register_short_password(self, client: AsyncClient, faculty):
        response = await client.post('/api/v1/auth/register', json=self.payload(faculty.id, password='123'))

        assert response.status_code == 400
        assert response.json()['error']['details']['field'] == 'password'

    @pytest.mark.asyncio
    async def test_register_missing_fields(self, client: AsyncClient):
        response = await client.post('/api/v1/auth/register', json={'email': fake.email()})

        assert response.status_code == 400
        assert len(response.json()['error']['details']['errors']) >= 1


class TestUserLogin:
    """Test user login endpoint"""

    @pytest.mark.asyncio
    async def test_login_success(self, client: AsyncClient, lecturer):
        response = await client.post('/api/v1/auth/login', json={
            'email': lecturer.email,
            'password': 'testpassword123',
        })

        assert response.status_code == 200
        data = response.json()
        assert data['message'] == 'Login successful'
        assert data['user']['id'] == lecturer.id
        assert data['token']

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, client: AsyncClient, lecturer):
        response = await client.post('/api/v1/auth/login', json={
            'email': lecturer.email,
            'password': 'wrongpassword',
        })

        assert response.status_code == 400
        assert response.json()['detail'] == 'Invalid email or password'

    @pytest.mark.asyncio
    async def test_login_unknown_email_same_message(self, client: AsyncClient, db_session):
        response = await client.post('/api/v1/auth/login', json={
            'email': 'nobody@example.com',
            'password': 'whatever',
        })

        assert response.status_code == 400
        assert response.json()['detail'] == 'Invalid email or password'

    @pytest.mark.asyncio
    async def test_login_token_opens_protected_routes(self, client: AsyncClient, lecturer):
        login = await client.post('/api/v1/auth/login', json={
            'email': lecturer.email,
            'password': 'testpassword123',
        })
        headers = {'Authorization': f"Bearer {login.json()['token']}"}

        response = await client.get('/api/v1/users/profile', headers=headers)

        assert response.status_code == 200
        assert response.json()['email'] == lecturer.email


class TestBearerToken:
    """Test the token check shared by every protected route"""

    @pytest.mark.asyncio
    async def test_missing_token(self, client: AsyncClient, db_session):
        response = await client.get('/api/v1/reports')

        assert response.status_code == 401
        assert response.json()['detail'] == 'No token, authorization denied'

    @pytest.mark.asyncio
    async def test_invalid_token(self, client: AsyncClient, db_session):
        response = await client.get('/api/v1/reports', headers={'Authorization': 'Bearer garbage'})

        assert response.status_code == 401
        assert response.json()['detail'] == 'Token is not valid'

    @pytest.mark.asyncio
    async def test_token_for_deleted_user(self, client: AsyncClient, db_session):
        headers = {'Authorization': f'Bearer {create_user_token(12345)}'}

        response = await client.get('/api/v1/reports', headers=headers)

        assert response.status_code == 401
        assert response.json()['detail'] == 'Token is not valid'

    @pytest.mark.asyncio
    async def test_response_carries_request_id(self, client: AsyncClient, db_session):
        response = await client.get('/api/v1/reports', headers={'X-Request-ID': 'abc123'})

        assert response.headers['X-Request-ID'] == 'abc123'
        assert 'X-Response-Time' in response.headers
