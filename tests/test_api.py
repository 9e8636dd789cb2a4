import pytest
from fastapi.testclient import TestClient

from song_library.api.routes import WELCOME_MESSAGE
from song_library.config import get_settings
from song_library.main import create_app
from song_library.schemas import Song
from song_library.services import SongLibrary, VisitCounter


@pytest.fixture
def client():
    with TestClient(create_app(SongLibrary(), VisitCounter())) as test_client:
        yield test_client


def add_song(client, title="A", artist="B", genre="C"):
    response = client.post(
        "/songs/new", json={"title": title, "artist": artist, "genre": genre}
    )
    assert response.status_code == 200
    return response.json()


class TestWelcomeAndCounter:
    """Plain-text endpoints"""

    def test_welcome(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.text == WELCOME_MESSAGE
        assert response.headers["content-type"].startswith("text/plain")

    def test_count_increments_per_visit(self, client):
        """Each /count request reports the next value"""
        assert client.get("/count").text == "Visit count: 1"
        assert client.get("/count").text == "Visit count: 2"
        assert client.get("/count").text == "Visit count: 3"

    def test_other_routes_do_not_count(self, client):
        client.get("/")
        client.get("/songs/search")

        assert client.get("/count").text == "Visit count: 1"


class TestCreateSong:
    """POST /songs/new"""

    def test_create_on_empty_library(self, client):
        """The first song gets id 1 and no plays"""
        response = client.post(
            "/songs/new", json={"title": "A", "artist": "B", "genre": "C"}
        )

        assert response.status_code == 200
        assert response.text == (
            '{"id":1,"title":"A","artist":"B","genre":"C","play_count":0}'
        )

    def test_ids_are_sequential(self, client):
        ids = [add_song(client, title=f"t{i}")["id"] for i in range(4)]

        assert ids == [1, 2, 3, 4]

    def test_missing_title_is_rejected(self, client):
        response = client.post("/songs/new", json={"artist": "B", "genre": "C"})

        assert response.status_code == 400
        assert response.text == "Invalid JSON"

    def test_malformed_json_is_rejected(self, client):
        response = client.post(
            "/songs/new",
            content=b'{"title": "A",',
            headers={"content-type": "application/json"},
        )

        assert response.status_code == 400
        assert response.text == "Invalid JSON"

    def test_wrong_field_type_is_rejected(self, client):
        response = client.post(
            "/songs/new", json={"title": 5, "artist": "B", "genre": "C"}
        )

        assert response.status_code == 400

    def test_empty_body_is_rejected(self, client):
        response = client.post("/songs/new")

        assert response.status_code == 400

    def test_rejected_body_adds_nothing(self, client):
        client.post("/songs/new", json={"title": "A"})

        assert client.get("/songs/search").json() == []

    @pytest.mark.parametrize(
        "content_type",
        ["application/x-www-form-urlencoded", "text/plain", "application/octet-stream"],
    )
    def test_json_body_is_read_whatever_the_content_type(self, client, content_type):
        """A valid JSON body is accepted even when the header does not say JSON"""
        response = client.post(
            "/songs/new",
            content=b'{"title":"A","artist":"B","genre":"C"}',
            headers={"content-type": content_type},
        )

        assert response.status_code == 200
        assert response.json() == {
            "id": 1,
            "title": "A",
            "artist": "B",
            "genre": "C",
            "play_count": 0,
        }

    def test_invalid_body_with_form_content_type_is_rejected(self, client):
        response = client.post(
            "/songs/new",
            content=b"title=A&artist=B&genre=C",
            headers={"content-type": "application/x-www-form-urlencoded"},
        )

        assert response.status_code == 400
        assert response.text == "Invalid JSON"

    def test_body_schema_is_documented(self, client):
        """The OpenAPI document still describes the expected body"""
        operation = client.get("/openapi.json").json()["paths"]["/songs/new"]["post"]
        schema = operation["requestBody"]["content"]["application/json"]["schema"]

        assert set(schema["required"]) == {"title", "artist", "genre"}


class TestSearchSongs:
    """GET /songs/search"""

    @pytest.fixture
    def catalog(self, client):
        add_song(client, "Bohemian Rhapsody", "Queen", "Rock")
        add_song(client, "So What", "Miles Davis", "Jazz")
        add_song(client, "Rock With You", "Michael Jackson", "Pop")
        return client

    def test_genre_substring_is_case_insensitive(self, catalog):
        response = catalog.get("/songs/search", params={"genre": "roc"})

        assert response.status_code == 200
        assert [s["title"] for s in response.json()] == ["Bohemian Rhapsody"]

    def test_no_query_returns_all_in_insertion_order(self, catalog):
        songs = catalog.get("/songs/search").json()

        assert [s["id"] for s in songs] == [1, 2, 3]

    def test_every_given_query_must_match(self, catalog):
        params = {"artist": "MI", "genre": "jazz"}

        songs = catalog.get("/songs/search", params=params).json()

        assert [s["title"] for s in songs] == ["So What"]

    def test_no_match_returns_empty_list(self, catalog):
        response = catalog.get("/songs/search", params={"title": "zzz"})

        assert response.status_code == 200
        assert response.json() == []

    def test_unknown_query_keys_are_ignored(self, catalog):
        songs = catalog.get("/songs/search", params={"year": "1975"}).json()

        assert len(songs) == 3

    def test_search_is_idempotent(self, catalog):
        first = catalog.get("/songs/search", params={"title": "o"})
        second = catalog.get("/songs/search", params={"title": "o"})

        assert first.json() == second.json()


class TestPlaySong:
    """GET /songs/play/{id}"""

    def test_play_increments_play_count(self, client):
        add_song(client)

        first = client.get("/songs/play/1")
        second = client.get("/songs/play/1")

        assert first.status_code == 200
        assert first.json()["play_count"] == 1
        assert second.json() == {
            "id": 1,
            "title": "A",
            "artist": "B",
            "genre": "C",
            "play_count": 2,
        }

    def test_play_is_visible_in_search(self, client):
        add_song(client)
        client.get("/songs/play/1")

        assert client.get("/songs/search").json()[0]["play_count"] == 1

    def test_unknown_id_is_not_found(self, client):
        response = client.get("/songs/play/999")

        assert response.status_code == 404
        assert response.json() == {"error": "Song not found"}

    @pytest.mark.parametrize("raw_id", ["abc", "-1", "1.5", "1/2", "%201", "+", "++1"])
    def test_non_numeric_id_is_rejected(self, client, raw_id):
        response = client.get(f"/songs/play/{raw_id}")

        assert response.status_code == 400
        assert response.text == "Invalid song ID"

    def test_leading_plus_is_accepted(self, client):
        """A plus sign before the digits is allowed, as in an unsigned integer parse"""
        add_song(client)

        response = client.get("/songs/play/+1")

        assert response.status_code == 200
        assert response.json()["play_count"] == 1

    def test_missing_id_is_rejected(self, client):
        response = client.get("/songs/play/")

        assert response.status_code == 400
        assert response.text == "Song ID missing"


class TestRouting:
    """Requests that match no route"""

    @pytest.mark.parametrize("path", ["/nope", "/songs", "/songs/play", "/count/"])
    def test_unknown_path(self, client, path):
        response = client.get(path)

        assert response.status_code == 404
        assert response.text == "Not Found"

    @pytest.mark.parametrize(
        "method, path",
        [("POST", "/"), ("DELETE", "/count"), ("GET", "/songs/new"), ("POST", "/songs/play/1")],
    )
    def test_wrong_method_is_not_found(self, client, method, path):
        response = client.request(method, path)

        assert response.status_code == 404
        assert response.text == "Not Found"


class TestSharedState:
    """Handlers operate on the state the app was built with"""

    def test_preloaded_library_is_served(self):
        library = SongLibrary(
            [Song(id=3, title="Jolene", artist="Dolly Parton", genre="Country", play_count=2)]
        )
        with TestClient(create_app(library, VisitCounter())) as client:
            assert client.get("/songs/search", params={"artist": "dolly"}).json()[0]["id"] == 3
            assert client.post(
                "/songs/new", json={"title": "A", "artist": "B", "genre": "C"}
            ).json()["id"] == 4
        assert len(library) == 2

    def test_apps_do_not_share_counters(self):
        with TestClient(create_app()) as first, TestClient(create_app()) as second:
            first.get("/count")

            assert second.get("/count").text == "Visit count: 1"

    def test_title_comes_from_settings(self):
        """The configured application name is the API title"""
        with TestClient(create_app()) as client:
            assert client.get("/openapi.json").json()["info"]["title"] == get_settings().app_name
