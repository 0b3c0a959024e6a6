import logging
from functools import wraps

from django.contrib import messages
from django.shortcuts import redirect, render
from django.views.decorators.http import require_POST

from .api import ApiError, AuthenticationLost, CinemateClient
from .forms import CredentialsForm, MovieForm, SignupForm


logger = logging.getLogger(__name__)

# The API token lives in the session, so it survives page reloads
TOKEN_SESSION_KEY = "cinemate_token"


def api_client(request):
    return CinemateClient(token=request.session.get(TOKEN_SESSION_KEY))


def token_required(view):
    """ Send visitors without a token to login, and drop the token as soon as
        the API answers 401/403 to it
    """
    @wraps(view)
    def wrapper(request, *args, **kwargs):
        if not request.session.get(TOKEN_SESSION_KEY):
            return redirect("dashboard:login")
        try:
            return view(request, *args, **kwargs)
        except AuthenticationLost:
            request.session.pop(TOKEN_SESSION_KEY, None)
            messages.info(request, "Your session has expired, please log in again.")
            return redirect("dashboard:login")
    return wrapper


def _start_session(request, tokens):
    request.session.cycle_key()
    request.session[TOKEN_SESSION_KEY] = tokens["token"]


# ---------------- SIGNUP ----------------
def signup_view(request):
    form = SignupForm(request.POST or None)
    if request.method == "POST" and form.is_valid():
        try:
            tokens = api_client(request).signup(**form.cleaned_data)
        except ApiError as e:
            if e.status_code == 409:
                form.add_error("email", "An account with this email already exists.")
            else:
                form.add_error(None, e.detail or "Signup error")
        else:
            _start_session(request, tokens)
            return redirect("dashboard:movies")

    return render(request, "dashboard/auth.html", {"form": form, "title": "Sign up"})


# ---------------- LOGIN ----------------
def login_view(request):
    form = CredentialsForm(request.POST or None)
    if request.method == "POST" and form.is_valid():
        try:
            tokens = api_client(request).login(**form.cleaned_data)
        except ApiError as e:
            if e.status_code == 401:
                form.add_error(None, "Invalid email or password.")
            else:
                form.add_error(None, e.detail or "Login failed, please try again.")
        else:
            _start_session(request, tokens)
            return redirect("dashboard:movies")

    return render(request, "dashboard/auth.html", {"form": form, "title": "Log in"})


# ---------------- LOGOUT ----------------
@require_POST
def logout_view(request):
    request.session.pop(TOKEN_SESSION_KEY, None)
    return redirect("dashboard:login")


# ---------------- MOVIES PAGE ----------------
def _render_movies(request, client, create_form=None, edit_form=None, editing_id=None):
    """ Always re-fetch the list from the API, there is no local copy to patch """
    error = None
    try:
        movies = client.list_movies()
    except AuthenticationLost:
        raise
    except ApiError:
        movies = []
        error = "Failed to fetch movies"

    editing_id = editing_id or request.GET.get("edit")
    if edit_form is None and editing_id:
        editing = next((m for m in movies if m.get("id") == editing_id), None)
        if editing is None:
            editing_id = None
        else:
            edit_form = MovieForm(initial=MovieForm.initial_from_movie(editing), prefix="edit")

    return render(request, "dashboard/movies.html", {
        "movies": movies,
        "error": error,
        "form": create_form or MovieForm(),
        "edit_form": edit_form,
        "editing_id": editing_id,
    })


@token_required
def movie_list(request):
    """ List the movies, and add one on POST """
    client = api_client(request)
    if request.method != "POST":
        return _render_movies(request, client)

    form = MovieForm(request.POST)
    if form.is_valid():
        try:
            client.create_movie(form.to_payload())
        except AuthenticationLost:
            raise
        except ApiError as e:
            logger.info("Create failed: %s", e)
            messages.error(request, "Could not add movie.")
        else:
            messages.success(request, "Movie added!")
            return redirect("dashboard:movies")

    return _render_movies(request, client, create_form=form)


@token_required
@require_POST
def movie_update(request, movie_id):
    client = api_client(request)
    form = MovieForm(request.POST, prefix="edit")
    if form.is_valid():
        try:
            client.update_movie(movie_id, form.to_payload())
        except AuthenticationLost:
            raise
        except ApiError as e:
            logger.info("Update of %s failed: %s", movie_id, e)
            messages.error(request, "Update failed, please try again.")
        else:
            return redirect("dashboard:movies")

    return _render_movies(request, client, edit_form=form, editing_id=str(movie_id))


@token_required
@require_POST
def movie_delete(request, movie_id):
    try:
        api_client(request).delete_movie(movie_id)
    except AuthenticationLost:
        raise
    except ApiError as e:
        logger.info("Delete of %s failed: %s", movie_id, e)
        messages.error(request, "Failed to delete movie.")
    return redirect("dashboard:movies")
