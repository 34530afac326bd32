import pytest
from django.urls import reverse
from rest_framework import status
from apps.accounts.models import User


# =============================================================================
# Registration Tests
# =============================================================================

@pytest.mark.django_db
class TestRegistration:
    """Tests for POST /api/auth/register/"""

    def test_register_success(self, api_client):
        """Successfully register a new user."""
        url = reverse('users:register')
        data = {
            'email': 'newuser@example.com',
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
            'name': 'New User',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['success'] is True
        tokens = response.data['data']['tokens']
        assert 'access' in tokens
        assert 'refresh' in tokens
        assert response.data['data']['user']['display_name'] == 'New User'
        assert User.objects.filter(email='newuser@example.com').exists()

    def test_register_without_name(self, api_client):
        """Name is optional; display name falls back to the email prefix."""
        url = reverse('users:register')
        data = {
            'email': 'minimal@example.com',
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['data']['user']['display_name'] == 'minimal'

    def test_register_duplicate_email(self, api_client, user):
        """Cannot register with existing email."""
        url = reverse('users:register')
        data = {
            'email': user.email,
            'password': 'SecurePass123!',
            'password_confirm': 'SecurePass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'An account with this email already exists'

    def test_register_password_mismatch(self, api_client):
        """Registration fails when passwords don't match."""
        url = reverse('users:register')
        data = {
            'email': 'mismatch@example.com',
            'password': 'SecurePass123!',
            'password_confirm': 'DifferentPass123!',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'password_confirm' in response.data['details']

    def test_register_weak_password(self, api_client):
        """Registration fails with weak password."""
        url = reverse('users:register')
        data = {
            'email': 'weak@example.com',
            'password': '123',
            'password_confirm': '123',
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST


# =============================================================================
# Login Tests
# =============================================================================

@pytest.mark.django_db
class TestLogin:
    """Tests for POST /api/auth/login/"""

    def test_login_success(self, api_client, user):
        """Successfully login with valid credentials."""
        url = reverse('users:login')
        response = api_client.post(url, {'email': user.email, 'password': 'TestPass123!'})

        assert response.status_code == status.HTTP_200_OK
        assert 'access' in response.data['data']['tokens']
        assert response.data['data']['user']['email'] == user.email

    def test_login_wrong_password(self, api_client, user):
        """Login fails with wrong password."""
        url = reverse('users:login')
        response = api_client.post(url, {'email': user.email, 'password': 'WrongPassword123!'})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data == {'success': False, 'error': 'Invalid email or password'}

    def test_login_inactive_user(self, api_client, user_inactive):
        url = reverse('users:login')
        response = api_client.post(url, {'email': user_inactive.email, 'password': 'TestPass123!'})

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_locked_after_repeated_failures(self, api_client, user, settings):
        """The account locks once the failure limit is reached."""
        settings.ACCOUNT_LOCKOUT_MAX_ATTEMPTS = 3
        url = reverse('users:login')

        for _ in range(3):
            api_client.post(url, {'email': user.email, 'password': 'nope'})

        response = api_client.post(url, {'email': user.email, 'password': 'TestPass123!'})

        assert response.status_code == 423
        assert response.data['error'] == 'Account is temporarily locked. Try again later.'


# =============================================================================
# Current User Tests
# =============================================================================

@pytest.mark.django_db
class TestCurrentUser:
    """Tests for /api/auth/user/"""

    def test_get_current_user(self, authenticated_client, user):
        response = authenticated_client.get(reverse('users:current-user'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['email'] == user.email
        assert response.data['group_notifications'] is True

    def test_get_current_user_unauthenticated(self, api_client):
        response = api_client.get(reverse('users:current-user'))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_update_preferences(self, authenticated_client, user):
        response = authenticated_client.patch(
            reverse('users:update-preferences'),
            {'vote_notifications': False},
            format='json',
        )

        assert response.status_code == status.HTTP_200_OK
        user.refresh_from_db()
        assert user.vote_notifications is False
        assert user.group_notifications is True


# =============================================================================
# Delete Account Tests
# =============================================================================

@pytest.mark.django_db
class TestDeleteAccount:
    """Tests for DELETE /api/auth/user/delete/"""

    def test_delete_account_success(self, authenticated_client, user):
        response = authenticated_client.delete(
            reverse('users:delete-account'),
            {'password': 'TestPass123!', 'confirm': True},
            format='json',
        )

        assert response.status_code == status.HTTP_200_OK
        user.refresh_from_db()
        assert user.is_deleted
        assert not User.objects.active().filter(id=user.id).exists()

    def test_delete_account_wrong_password(self, authenticated_client, user):
        response = authenticated_client.delete(
            reverse('users:delete-account'),
            {'password': 'WrongPassword!', 'confirm': True},
            format='json',
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        user.refresh_from_db()
        assert not user.is_deleted

    def test_delete_account_without_confirmation(self, authenticated_client, user):
        response = authenticated_client.delete(
            reverse('users:delete-account'),
            {'password': 'TestPass123!', 'confirm': False},
            format='json',
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST


# =============================================================================
# User Model Tests
# =============================================================================

@pytest.mark.django_db
class TestUserModel:

    def test_create_superuser(self):
        admin = User.objects.create_superuser(email='admin@example.com', password='AdminPass123!')

        assert admin.is_staff
        assert admin.is_superuser

    def test_get_display_name(self, user):
        assert user.get_display_name() == 'Test User'
        user.name = ''
        assert user.get_display_name() == 'testuser'

    def test_soft_delete(self, user):
        user.soft_delete()

        assert user.is_deleted
        assert user.is_active is False
        assert not user.has_usable_password()
