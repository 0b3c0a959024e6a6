from rest_framework import routers
from django.urls import path, include
from rest_framework_simplejwt.views import TokenRefreshView
from .views import AuthViewSet, MovieViewSet, health

# Trailing slashes are optional: /movies and /movies/ both route.
# SimpleRouter's constructor only takes a flag, so the pattern is set afterwards
router = routers.SimpleRouter()
router.trailing_slash = '/?'
router.register(r'auth', AuthViewSet, basename='auth')
router.register(r'movies', MovieViewSet, basename='movie')


urlpatterns = [
    path('auth/token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),
    path('health/', health, name='health'),
    path('', include(router.urls)),
]
