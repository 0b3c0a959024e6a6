from django.urls import path

from . import views

app_name = "dashboard"

urlpatterns = [
    path("", views.movie_list, name="movies"),
    path("login/", views.login_view, name="login"),
    path("signup/", views.signup_view, name="signup"),
    path("logout/", views.logout_view, name="logout"),
    path("movies/<uuid:movie_id>/edit/", views.movie_update, name="movie_update"),
    path("movies/<uuid:movie_id>/delete/", views.movie_delete, name="movie_delete"),
]
