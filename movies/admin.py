from django.contrib import admin

from .models import Movie, User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    """ Accounts are created through signup or createsuperuser, so the admin never edits passwords """
    list_display = ['email', 'is_staff', 'is_active', 'created_at']
    search_fields = ['email']
    ordering = ['email']
    fields = ['email', 'is_active', 'is_staff', 'is_superuser', 'last_login', 'date_joined']
    readonly_fields = ['last_login', 'date_joined']


@admin.register(Movie)
class MovieAdmin(admin.ModelAdmin):
    list_display = ['title', 'owner', 'watched_date', 'rating', 'director']
    list_filter = ['rating']
    readonly_fields = ['owner', 'created_at', 'updated_at']
