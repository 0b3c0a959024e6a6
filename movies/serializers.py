from collections.abc import Mapping

from rest_framework import serializers
from .models import User, Movie


class CredentialsSerializer(serializers.Serializer):
    """Serializer for signup and login bodies"""
    email = serializers.EmailField(required=True)
    # Passwords are taken exactly as typed
    password = serializers.CharField(write_only=True, required=True, trim_whitespace=False)


class SignupSerializer(CredentialsSerializer):
    """Signup body; only new passwords get the length rule"""
    password = serializers.CharField(write_only=True, required=True, trim_whitespace=False, min_length=6)


class UserSerializer(serializers.ModelSerializer):
    """Serializer for the public part of a User, the password hash never leaves the server"""
    id = serializers.UUIDField(source='user_id', read_only=True)

    class Meta:
        model = User
        fields = ['id', 'email']


class StringListField(serializers.ListField):
    """ Ordered list of trimmed, non-blank strings """
    child = serializers.CharField(max_length=255)


class MovieSerializer(serializers.ModelSerializer):
    """Serializer for Movie model, exposed in camelCase to API clients

        Required on create: title, watchedDate, rating (1-10), genres (non-empty),
        director, actors (non-empty). Updates validate whichever fields are sent.
    """
    id = serializers.UUIDField(source='movie_id', read_only=True)
    ownerId = serializers.UUIDField(source='owner_id', read_only=True)
    watchedDate = serializers.DateField(source='watched_date')
    rating = serializers.IntegerField(min_value=1, max_value=10)
    genres = StringListField(allow_empty=False)
    tags = StringListField(required=False)
    actors = StringListField(allow_empty=False)
    notes = serializers.CharField(required=False, allow_blank=True)
    posterUrl = serializers.URLField(source='poster_url', required=False, allow_blank=True, max_length=500)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Movie
        fields = ['id', 'ownerId', 'title', 'watchedDate', 'rating', 'genres', 'tags',
                  'director', 'actors', 'notes', 'posterUrl', 'createdAt', 'updatedAt']

    def to_internal_value(self, data):
        """ Refuse keys that aren't movie fields instead of silently dropping them """
        if isinstance(data, Mapping):
            unknown = sorted(key for key in data if key not in self.fields)
            if unknown:
                raise serializers.ValidationError({key: ["Unknown field."] for key in unknown})
        return super().to_internal_value(data)
