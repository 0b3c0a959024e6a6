import logging
import uuid

from django.conf import settings
from django.db import DatabaseError, connection
from rest_framework import viewsets, status
from rest_framework.decorators import action, api_view, authentication_classes, permission_classes
from rest_framework.filters import OrderingFilter
from rest_framework.permissions import IsAuthenticated, AllowAny
from rest_framework.response import Response

from . import sessions
from .exceptions import MovieNotFound
from .models import Movie
from .permissions import IsMovieOwner
from .serializers import CredentialsSerializer, SignupSerializer, UserSerializer, MovieSerializer


logger = logging.getLogger(__name__)


class AuthViewSet(viewsets.ViewSet):
    """ Signup and login, the only endpoints reachable without a token """
    authentication_classes = []
    permission_classes = [AllowAny]

    def _session_response(self, user, tokens, status_code):
        return Response(
            {**tokens, "user": UserSerializer(user).data},
            status=status_code
        )

    @action(detail=False, methods=['post'])
    def signup(self, request):
        """ Create an account and return a token for it """
        serializer = SignupSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user, tokens = sessions.signup(**serializer.validated_data)
        return self._session_response(user, tokens, status.HTTP_201_CREATED)

    @action(detail=False, methods=['post'])
    def login(self, request):
        """ Exchange email and password for a token """
        serializer = CredentialsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user, tokens = sessions.login(request=request._request, **serializer.validated_data)
        return self._session_response(user, tokens, status.HTTP_200_OK)


class MovieViewSet(viewsets.ModelViewSet):
    """ Viewset for the caller's own movie log

            - list: every movie the caller owns, newest watch first unless ?ordering= says otherwise
            - create / retrieve / update (partial) / destroy

        A movie owned by someone else is answered exactly like a missing one (404).
    """
    permission_classes = [IsAuthenticated, IsMovieOwner]
    serializer_class = MovieSerializer
    queryset = Movie.objects.all()
    pagination_class = None
    filter_backends = [OrderingFilter]
    http_method_names = ['get', 'post', 'put', 'patch', 'delete', 'head', 'options']

    # Sorting
    ordering_fields = ['watched_date', 'rating', 'title', 'created_at']

    @property
    def ordering(self):
        return settings.CINEMATE_MOVIE_ORDERING

    def get_queryset(self):
        """ The logged-in user only ever sees their own movies """
        return Movie.objects.owned_by(self.request.user)

    def get_object(self):
        movie = self.get_queryset().filter(movie_id=self._movie_id()).first()
        if movie is None:
            raise MovieNotFound()
        self.check_object_permissions(self.request, movie)
        return movie

    def _movie_id(self):
        """ Malformed ids can't match any movie, so they 404 like any other miss """
        try:
            return uuid.UUID(str(self.kwargs[self.lookup_field]))
        except ValueError:
            raise MovieNotFound()

    def perform_create(self, serializer):
        movie = serializer.save(owner=self.request.user)
        logger.info("User %s logged movie %s", self.request.user.pk, movie.pk)

    def update(self, request, *args, **kwargs):
        """ PUT and PATCH both replace only the fields present in the body """
        serializer = self.get_serializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        movie = Movie.objects.update_owned(self._movie_id(), request.user, **serializer.validated_data)
        if movie is None:
            raise MovieNotFound()
        return Response(self.get_serializer(movie).data)

    def destroy(self, request, *args, **kwargs):
        if not Movie.objects.delete_owned(self._movie_id(), request.user):
            raise MovieNotFound()
        logger.info("User %s deleted movie %s", request.user.pk, self.kwargs[self.lookup_field])
        return Response({"success": True}, status=status.HTTP_200_OK)


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def health(request):
    """ Liveness of the process and its database connection """
    try:
        connection.ensure_connection()
    except DatabaseError:
        logger.exception("Database health check failed")
        return Response({"status": "unavailable"}, status=status.HTTP_503_SERVICE_UNAVAILABLE)
    return Response({"status": "ok"})
