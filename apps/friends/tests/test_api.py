import pytest
from rest_framework import status

from apps.friends.models import FriendRequest


@pytest.mark.django_db
class TestFriendsApi:
    """Tests for /api/friends/"""

    def test_full_flow(self, alice_client, bob_client, alice, bob):
        response = alice_client.post('/api/friends/request/', {'email': 'bob@example.com'}, format='json')
        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['message'] == 'Friend request sent'

        response = bob_client.get('/api/friends/requests/')
        request_id = response.data['data'][0]['id']
        assert response.data['data'][0]['sender']['email'] == 'alice@example.com'

        response = bob_client.post('/api/friends/accept/', {'request_id': request_id}, format='json')
        assert response.status_code == status.HTTP_200_OK

        response = alice_client.get('/api/friends/')
        assert [friend['email'] for friend in response.data['data']] == ['bob@example.com']

        response = alice_client.delete(f'/api/friends/{bob.id}/')
        assert response.data['message'] == 'Friend removed'
        assert bob_client.get('/api/friends/').data['data'] == []

    def test_request_to_self(self, alice_client):
        response = alice_client.post('/api/friends/request/', {'email': 'alice@example.com'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'You cannot send a friend request to yourself'

    def test_request_requires_email(self, alice_client):
        response = alice_client.post('/api/friends/request/', {}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'email' in response.data['details']

    def test_duplicate_request(self, alice_client, alice, bob):
        FriendRequest.objects.create(sender=bob, receiver=alice)

        response = alice_client.post('/api/friends/request/', {'email': 'bob@example.com'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Friend request already pending'

    def test_decline(self, bob_client, alice, bob):
        friend_request = FriendRequest.objects.create(sender=alice, receiver=bob)

        response = bob_client.post('/api/friends/decline/', {'request_id': str(friend_request.id)}, format='json')

        assert response.status_code == status.HTTP_200_OK
        friend_request.refresh_from_db()
        assert friend_request.status == 'declined'
