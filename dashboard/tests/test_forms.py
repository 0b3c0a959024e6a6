from django.test import SimpleTestCase

from dashboard.forms import CredentialsForm, MovieForm, SignupForm, split_csv


VALID = {
    "title": "Dune",
    "watched_date": "2024-01-01",
    "rating": "9",
    "genres": "Sci-Fi, Adventure",
    "tags": "",
    "director": "Villeneuve",
    "actors": " Chalamet ,, Zendaya, ",
    "poster_url": "",
    "notes": "",
}


class TestSplitCsv(SimpleTestCase):
    def test_split_trims_and_drops_blanks(self):
        self.assertEqual(split_csv(" a, b ,, ,c "), ["a", "b", "c"])
        self.assertEqual(split_csv(""), [])
        self.assertEqual(split_csv(None), [])


class TestMovieForm(SimpleTestCase):
    def test_payload(self):
        form = MovieForm(VALID)
        self.assertTrue(form.is_valid(), form.errors)

        self.assertEqual(form.to_payload(), {
            "title": "Dune",
            "watchedDate": "2024-01-01",
            "rating": 9,
            "genres": ["Sci-Fi", "Adventure"],
            "tags": [],
            "director": "Villeneuve",
            "actors": ["Chalamet", "Zendaya"],
            "notes": "",
            "posterUrl": "",
        })

    def test_lists_of_only_commas_are_empty(self):
        form = MovieForm({**VALID, "genres": " , ,", "actors": ","})
        self.assertFalse(form.is_valid())
        self.assertIn("genres", form.errors)
        self.assertIn("actors", form.errors)

    def test_rating_range(self):
        self.assertFalse(MovieForm({**VALID, "rating": "0"}).is_valid())
        self.assertFalse(MovieForm({**VALID, "rating": "11"}).is_valid())

    def test_poster_url_without_scheme_gets_https(self):
        form = MovieForm({**VALID, "poster_url": "img.example.com/dune.jpg"})
        self.assertTrue(form.is_valid(), form.errors)
        self.assertEqual(form.to_payload()["posterUrl"], "https://img.example.com/dune.jpg")

    def test_initial_from_movie(self):
        initial = MovieForm.initial_from_movie({
            "title": "Dune",
            "watchedDate": "2024-01-01T00:00:00Z",
            "rating": 9,
            "genres": ["Sci-Fi", "Adventure"],
            "tags": None,
            "director": "Villeneuve",
            "actors": ["Chalamet"],
        })

        self.assertEqual(initial["watched_date"], "2024-01-01")
        self.assertEqual(initial["genres"], "Sci-Fi, Adventure")
        self.assertEqual(initial["tags"], "")
        self.assertEqual(initial["poster_url"], "")


class TestCredentialForms(SimpleTestCase):
    def test_signup_needs_six_characters(self):
        self.assertFalse(SignupForm({"email": "a@x.com", "password": "12345"}).is_valid())
        self.assertTrue(SignupForm({"email": "a@x.com", "password": "123456"}).is_valid())

    def test_login_accepts_any_password(self):
        self.assertTrue(CredentialsForm({"email": "a@x.com", "password": "abc"}).is_valid())
