import graphene
from django.conf import settings
from graphene_django import DjangoObjectType
from graphql import GraphQLError
from rest_framework.exceptions import AuthenticationFailed

from .authentication import BearerTokenAuthentication
from .models import Movie, User


# Same sortable fields as the REST list
ORDERING_FIELDS = ('watched_date', 'rating', 'title', 'created_at')


def authenticated_user(info):
    """ Resolve the caller from the bearer token, exactly like the REST API does """
    try:
        result = BearerTokenAuthentication().authenticate(info.context)
    except AuthenticationFailed as exc:
        raise GraphQLError(str(exc.detail))
    if result is None:
        raise GraphQLError("Authentication credentials were not provided.")
    return result[0]


# ────────────── TYPES ──────────────

class UserType(DjangoObjectType):
    class Meta:
        model = User
        fields = ["user_id", "email", "created_at"]

class MovieType(DjangoObjectType):
    owner_id = graphene.UUID()
    genres = graphene.List(graphene.NonNull(graphene.String), required=True)
    tags = graphene.List(graphene.NonNull(graphene.String), required=True)
    actors = graphene.List(graphene.NonNull(graphene.String), required=True)

    class Meta:
        model = Movie
        fields = ["movie_id", "title", "watched_date", "rating", "director",
                  "notes", "poster_url", "created_at", "updated_at"]

    def resolve_genres(self, info):
        return self.genres

    def resolve_tags(self, info):
        return self.tags or []

    def resolve_actors(self, info):
        return self.actors


# ────────────── QUERY ──────────────

class Query(graphene.ObjectType):
    me = graphene.Field(UserType)

    my_movies = graphene.List(
        graphene.NonNull(MovieType),
        ordering=graphene.String(), # e.g. "-rating" or "watched_date"
    )

    movie = graphene.Field(
        MovieType,
        movie_id=graphene.UUID(required=True)
    )

    # ────────── RESOLVERS ──────────

    def resolve_me(self, info):
        """ return the current authenticated user """
        return authenticated_user(info)

    def resolve_my_movies(self, info, ordering=None):
        """ Return all movies of the caller, default order as in the REST list """
        qs = Movie.objects.owned_by(authenticated_user(info))

        if ordering:
            if ordering.lstrip('-') not in ORDERING_FIELDS:
                raise GraphQLError(f"Cannot order by '{ordering}'")
            return qs.order_by(ordering)
        return qs.order_by(*settings.CINEMATE_MOVIE_ORDERING)

    def resolve_movie(self, info, movie_id):
        """ Return one of the caller's movies by ID, null for anything else """
        return Movie.objects.owned_by(authenticated_user(info)).filter(movie_id=movie_id).first()
