from django import forms


def split_csv(value):
    """ "Drama, , Crime " -> ["Drama", "Crime"] """
    return [item.strip() for item in (value or "").split(",") if item.strip()]


def join_csv(items):
    return ", ".join(items or [])


class CredentialsForm(forms.Form):
    email = forms.EmailField()
    password = forms.CharField(widget=forms.PasswordInput, strip=False)


class SignupForm(CredentialsForm):
    password = forms.CharField(widget=forms.PasswordInput, strip=False, min_length=6)


class MovieForm(forms.Form):
    """ Create/edit form; list-valued fields are typed as comma separated text """
    title = forms.CharField(max_length=255)
    watched_date = forms.DateField(label="Date watched", widget=forms.DateInput(attrs={"type": "date"}))
    rating = forms.IntegerField(min_value=1, max_value=10)
    genres = forms.CharField(help_text="Comma separated")
    tags = forms.CharField(required=False, help_text="Comma separated, optional")
    director = forms.CharField(max_length=255)
    actors = forms.CharField(help_text="Comma separated")
    poster_url = forms.URLField(label="Poster URL", required=False, max_length=500, assume_scheme="https")
    notes = forms.CharField(required=False, widget=forms.Textarea(attrs={"rows": 2}))

    def clean_genres(self):
        genres = split_csv(self.cleaned_data["genres"])
        if not genres:
            raise forms.ValidationError("Enter at least one genre.")
        return genres

    def clean_tags(self):
        return split_csv(self.cleaned_data.get("tags"))

    def clean_actors(self):
        actors = split_csv(self.cleaned_data["actors"])
        if not actors:
            raise forms.ValidationError("Enter at least one actor.")
        return actors

    def to_payload(self):
        """ Body for POST/PUT /movies """
        data = self.cleaned_data
        return {
            "title": data["title"],
            "watchedDate": data["watched_date"].isoformat(),
            "rating": data["rating"],
            "genres": data["genres"],
            "tags": data["tags"],
            "director": data["director"],
            "actors": data["actors"],
            "notes": data["notes"],
            "posterUrl": data["poster_url"],
        }

    @staticmethod
    def initial_from_movie(movie):
        """ Pre-fill the edit form from an API movie """
        return {
            "title": movie.get("title", ""),
            "watched_date": (movie.get("watchedDate") or "")[:10],
            "rating": movie.get("rating"),
            "genres": join_csv(movie.get("genres")),
            "tags": join_csv(movie.get("tags")),
            "director": movie.get("director", ""),
            "actors": join_csv(movie.get("actors")),
            "poster_url": movie.get("posterUrl") or "",
            "notes": movie.get("notes") or "",
        }
