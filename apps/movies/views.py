from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from drf_spectacular.utils import extend_schema

from apps.core.exceptions import NotFoundError
from apps.core.responses import api_response
from apps.groups.permissions import require_membership

from .serializers import (
    MovieSerializer,
    WatchlistEntrySerializer,
    AddToWatchlistSerializer,
    MovieVoteSerializer,
    CastVoteSerializer,
)
from .services import (
    get_movie,
    get_featured_movies,
    add_to_watchlist,
    remove_from_watchlist,
    get_group_watchlist,
    cast_vote,
    get_movie_votes,
)


# ============================================
# Catalog
# ============================================

@extend_schema(responses={200: MovieSerializer(many=True)}, tags=['movies'])
@api_view(['GET'])
@permission_classes([AllowAny])
def featured_movies(request):
    """Top 8 movies by rating."""
    serializer = MovieSerializer(get_featured_movies(), many=True)
    return api_response(serializer.data)


@extend_schema(responses={200: MovieSerializer}, tags=['movies'])
@api_view(['GET'])
@permission_classes([AllowAny])
def hero_movie(request):
    """Highest rated movie."""
    movies = list(get_featured_movies(limit=1))
    if not movies:
        raise NotFoundError('No movies found')
    return api_response(MovieSerializer(movies[0]).data)


@extend_schema(responses={200: MovieSerializer}, tags=['movies'])
@api_view(['GET'])
@permission_classes([AllowAny])
def movie_detail(request, movie_id):
    return api_response(MovieSerializer(get_movie(movie_id)).data)


# ============================================
# Group watchlist and votes
# ============================================

@extend_schema(
    methods=['GET'],
    responses={200: WatchlistEntrySerializer(many=True)},
    tags=['watchlist'],
)
@extend_schema(
    methods=['POST'],
    request=AddToWatchlistSerializer,
    responses={201: WatchlistEntrySerializer},
    tags=['watchlist'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, require_membership('group_pk')])
def group_watchlist(request, group_pk):
    """List the watchlist, or add a movie to it."""
    if request.method == 'GET':
        entries = get_group_watchlist(group_id=group_pk)
        return api_response(WatchlistEntrySerializer(entries, many=True).data)

    serializer = AddToWatchlistSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    entry = add_to_watchlist(
        group_id=group_pk,
        user=request.user,
        movie_id=serializer.validated_data['movie_id'],
    )

    return api_response(
        WatchlistEntrySerializer(entry).data,
        message='Movie added to watchlist',
        status=status.HTTP_201_CREATED,
    )


@extend_schema(tags=['watchlist'])
@api_view(['DELETE'])
@permission_classes([IsAuthenticated, require_membership('group_pk')])
def watchlist_entry(request, group_pk, movie_id):
    remove_from_watchlist(group_id=group_pk, membership=request.membership, movie_id=movie_id)
    return api_response(message='Movie removed from watchlist')


@extend_schema(request=CastVoteSerializer, responses={200: MovieVoteSerializer}, tags=['votes'])
@api_view(['POST'])
@permission_classes([IsAuthenticated, require_membership('group_pk')])
def vote(request, group_pk):
    """Cast or replace a vote on a watchlist movie."""
    serializer = CastVoteSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    movie_vote = cast_vote(
        group_id=group_pk,
        user=request.user,
        movie_id=serializer.validated_data['movie_id'],
        vote_value=serializer.validated_data['vote_value'],
    )

    return api_response(MovieVoteSerializer(movie_vote).data, message='Vote recorded')


@extend_schema(responses={200: MovieVoteSerializer(many=True)}, tags=['votes'])
@api_view(['GET'])
@permission_classes([IsAuthenticated, require_membership('group_pk')])
def movie_votes(request, group_pk, movie_id):
    votes = get_movie_votes(group_id=group_pk, movie_id=movie_id)
    return api_response(MovieVoteSerializer(votes, many=True).data)
