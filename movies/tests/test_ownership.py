from django.test import TestCase
from rest_framework.test import APIClient
from django.contrib.auth import get_user_model

from movies.models import Movie


User = get_user_model()


class TestOwnership(TestCase):
    """ Another user's movie is indistinguishable from a missing one """

    def setUp(self):
        self.alice = User.objects.create_user(email="alice@x.com", password="pass-a")
        self.bob = User.objects.create_user(email="bob@x.com", password="pass-b")

        self.alice_client = self.client_for("alice@x.com", "pass-a")
        self.bob_client = self.client_for("bob@x.com", "pass-b")

        response = self.alice_client.post("/movies", {
            "title": "Heat",
            "watchedDate": "2023-03-03",
            "rating": 8,
            "genres": ["Crime"],
            "director": "Mann",
            "actors": ["Pacino", "De Niro"],
        })
        self.movie_id = response.json()["id"]

    def client_for(self, email, password):
        client = APIClient()
        token = client.post("/auth/login", {"email": email, "password": password}).json()["token"]
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
        return client

    def test_list_only_shows_own_movies(self):
        self.assertEqual(self.bob_client.get("/movies").json(), [])
        self.assertEqual(len(self.alice_client.get("/movies").json()), 1)

    def test_other_user_cannot_retrieve(self):
        response = self.bob_client.get(f"/movies/{self.movie_id}")
        self.assertEqual(response.status_code, 404)

    def test_other_user_cannot_update(self):
        response = self.bob_client.put(f"/movies/{self.movie_id}", {"rating": 1})
        self.assertEqual(response.status_code, 404)
        self.assertEqual(Movie.objects.get(movie_id=self.movie_id).rating, 8)

    def test_other_user_cannot_delete(self):
        response = self.bob_client.delete(f"/movies/{self.movie_id}")
        self.assertEqual(response.status_code, 404)
        self.assertTrue(Movie.objects.filter(movie_id=self.movie_id).exists())

    def test_foreign_and_missing_ids_answer_the_same(self):
        foreign = self.bob_client.delete(f"/movies/{self.movie_id}")
        missing = self.bob_client.delete("/movies/00000000-0000-0000-0000-000000000000")

        self.assertEqual(foreign.status_code, missing.status_code)
        self.assertEqual(foreign.json(), missing.json())

    def test_update_cannot_move_a_movie_to_another_owner(self):
        response = self.alice_client.put(f"/movies/{self.movie_id}", {"ownerId": str(self.bob.user_id), "rating": 7})
        self.assertEqual(response.status_code, 200)

        movie = Movie.objects.get(movie_id=self.movie_id)
        self.assertEqual(movie.owner, self.alice)
        self.assertEqual(movie.rating, 7)
