import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User


def client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def alice(db):
    return User.objects.create_user(email='alice@example.com', password='TestPass123!', name='Alice')


@pytest.fixture
def bob(db):
    return User.objects.create_user(email='bob@example.com', password='TestPass123!', name='Bob')


@pytest.fixture
def alice_client(alice):
    return client_for(alice)


@pytest.fixture
def bob_client(bob):
    return client_for(bob)
