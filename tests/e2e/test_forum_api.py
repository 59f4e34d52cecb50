"""End-to-end tests for the forum HTTP API."""

import pytest
from dishka.integrations.fastapi import FastapiProvider
from fastapi.testclient import TestClient

from agora.interface.api.app import create_app
from tests.conftest import ALICE, BOB, CAROL, auth_cookie
from tests.di import build_test_container


@pytest.fixture
def client():
    """Create test client backed by in-memory persistence."""
    app_instance = create_app(container=build_test_container(None, FastapiProvider()))
    return TestClient(app_instance)


def _create_post(client, user_id=ALICE, **fields):
    payload = {"title": "Hello Agora", "body": "First post", **fields}
    response = client.post("/posts", json=payload, cookies=auth_cookie(user_id))
    assert response.status_code == 201
    return response.json()


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestPostEndpoints:
    """Post feed and CRUD over HTTP."""

    def test_create_post_without_auth_fails(self, client):
        """Should return 401 with the unauthorized error kind."""
        # Act
        response = client.post("/posts", json={"title": "Anonymous"})

        # Assert
        assert response.status_code == 401
        assert response.json()["error"] == "unauthorized"

    def test_create_post_with_invalid_token_fails(self, client):
        response = client.post(
            "/posts",
            json={"title": "Forged"},
            cookies={"auth_token": "invalid-token"},
        )

        assert response.status_code == 401

    def test_create_and_list_posts(self, client):
        # Arrange
        _create_post(client, title="Older")
        created = _create_post(client, title="Newer", category="Science")

        # Act
        response = client.get("/posts")

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 2
        assert [post["title"] for post in body["posts"]] == ["Newer", "Older"]
        assert body["posts"][0]["post_id"] == created["post_id"]
        assert body["posts"][0]["author_username"] == "alice"

    def test_list_posts_filters_by_category(self, client):
        _create_post(client, title="Physics", category="Science")
        _create_post(client, title="Chatter")

        response = client.get("/posts", params={"category": "Science"})

        assert [post["title"] for post in response.json()["posts"]] == ["Physics"]

    def test_blank_category_filter_is_bad_request(self, client):
        response = client.get("/posts", params={"category": "   "})

        assert response.status_code == 400
        assert response.json()["error"] == "invalid_input"

    def test_overlong_category_filter_is_rejected(self, client):
        response = client.get("/posts", params={"category": "x" * 60})

        assert response.status_code == 422

    def test_create_post_with_blank_category_is_bad_request(self, client):
        response = client.post(
            "/posts",
            json={"title": "Spaces", "category": "   "},
            cookies=auth_cookie(ALICE),
        )

        assert response.status_code == 400
        assert response.json()["error"] == "invalid_input"
        assert client.get("/posts").json()["total"] == 0

    def test_get_missing_post_returns_not_found(self, client):
        response = client.get("/posts/999")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    def test_update_post_by_other_user_is_forbidden(self, client):
        post = _create_post(client, user_id=ALICE)

        response = client.patch(
            f"/posts/{post['post_id']}",
            json={"title": "Mine now"},
            cookies=auth_cookie(BOB),
        )

        assert response.status_code == 403
        assert response.json()["error"] == "forbidden"

    def test_author_deletes_post(self, client):
        post = _create_post(client)

        response = client.delete(
            f"/posts/{post['post_id']}", cookies=auth_cookie(ALICE)
        )

        assert response.status_code == 200
        assert client.get(f"/posts/{post['post_id']}").status_code == 404


class TestVoteEndpoints:
    """Vote ledger over HTTP."""

    def test_double_upvote_conflicts(self, client):
        # Arrange
        post = _create_post(client)
        url = f"/posts/{post['post_id']}/upvote"

        # Act
        first = client.post(url, cookies=auth_cookie(BOB))
        second = client.post(url, cookies=auth_cookie(BOB))

        # Assert
        assert first.status_code == 200
        assert first.json()["upvotes"] == 1
        assert first.json()["was_upvoted"] is True
        assert second.status_code == 409
        assert second.json()["error"] == "conflict"
        assert second.json()["reason"] == "already_voted"

    def test_anonymous_vote_is_refused_by_default(self, client):
        post = _create_post(client)

        response = client.post(f"/posts/{post['post_id']}/downvote")

        assert response.status_code == 401

    def test_remove_vote_restores_counter(self, client):
        # Arrange
        post = _create_post(client)
        url = f"/posts/{post['post_id']}/downvote"
        client.post(url, cookies=auth_cookie(CAROL))

        # Act
        response = client.delete(url, cookies=auth_cookie(CAROL))

        # Assert
        assert response.status_code == 200
        assert response.json()["downvotes"] == 0
        assert response.json()["was_downvoted"] is False


class TestCommentEndpoints:
    """Comment tree over HTTP."""

    def test_post_without_comments_has_empty_tree(self, client):
        post = _create_post(client)

        response = client.get(f"/posts/{post['post_id']}/comments")

        assert response.status_code == 200
        assert response.json() == {"post_id": post["post_id"], "comments": []}

    def test_thread_with_reply(self, client):
        # Arrange
        post = _create_post(client)
        root = client.post(
            f"/posts/{post['post_id']}/comments",
            json={"body": "Top level"},
            cookies=auth_cookie(BOB),
        ).json()
        reply = client.post(
            f"/comments/{root['comment_id']}/reply",
            json={"body": "A reply"},
            cookies=auth_cookie(CAROL),
        )

        # Act
        response = client.get(f"/posts/{post['post_id']}/comments")

        # Assert
        assert reply.status_code == 201
        comments = response.json()["comments"]
        assert len(comments) == 1
        assert comments[0]["body"] == "Top level"
        assert comments[0]["reply_count"] == 1
        assert comments[0]["replies"][0]["body"] == "A reply"
        assert comments[0]["replies"][0]["depth"] == 1

    def test_negative_depth_is_bad_request(self, client):
        post = _create_post(client)

        response = client.get(
            f"/posts/{post['post_id']}/comments", params={"depth": -1}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "invalid_input"

    def test_depth_beyond_default_is_accepted(self, client):
        post = _create_post(client)

        response = client.get(
            f"/posts/{post['post_id']}/comments", params={"depth": 11}
        )

        assert response.status_code == 200


class TestPollEndpoints:
    """Poll ballots over HTTP."""

    def test_single_choice_ballot_flow(self, client):
        # Arrange
        created = client.post(
            "/polls",
            json={"title": "Lunch?", "options": ["Pizza", "Salad"]},
            cookies=auth_cookie(ALICE),
        )
        assert created.status_code == 201
        poll = created.json()["poll"]
        pizza, salad = (option["option_id"] for option in poll["options"])
        url = f"/polls/{poll['poll_id']}/vote"

        # Act
        client.post(url, json={"option_ids": [pizza]}, cookies=auth_cookie(BOB))
        changed = client.post(
            url, json={"option_ids": [salad]}, cookies=auth_cookie(BOB)
        )
        results = client.get(f"/polls/{poll['poll_id']}/results")

        # Assert
        assert changed.status_code == 200
        assert changed.json()["user_selection"] == [salad]
        tally = {option["option_id"]: option["votes"] for option in results.json()["options"]}
        assert tally == {pizza: 0, salad: 1}
        assert results.json()["total_votes"] == 1

    def test_anonymous_ballot_is_unauthorized(self, client):
        created = client.post(
            "/polls",
            json={"title": "Coffee?", "options": ["Yes", "No"]},
            cookies=auth_cookie(ALICE),
        ).json()
        poll = created["poll"]

        response = client.post(
            f"/polls/{poll['poll_id']}/vote",
            json={"option_ids": [poll["options"][0]["option_id"]]},
        )

        assert response.status_code == 401

    def test_poll_with_one_option_is_rejected(self, client):
        response = client.post(
            "/polls",
            json={"title": "Lonely", "options": ["Only"]},
            cookies=auth_cookie(ALICE),
        )

        assert response.status_code == 422

    def test_empty_or_long_option_is_rejected(self, client):
        for options in (["", "b"], ["a", "x" * 201]):
            response = client.post(
                "/polls",
                json={"title": "P", "options": options},
                cookies=auth_cookie(ALICE),
            )

            assert response.status_code == 422

    def test_whitespace_option_is_bad_request(self, client):
        response = client.post(
            "/polls",
            json={"title": "P", "options": ["   ", "b"]},
            cookies=auth_cookie(ALICE),
        )

        assert response.status_code == 400
        assert response.json()["error"] == "invalid_input"

    def test_list_poll_options_with_counts(self, client):
        # Arrange
        poll = client.post(
            "/polls",
            json={"title": "Tea?", "options": ["Green", "Black"]},
            cookies=auth_cookie(ALICE),
        ).json()["poll"]
        black = poll["options"][1]["option_id"]
        client.post(
            f"/polls/{poll['poll_id']}/vote",
            json={"option_ids": [black]},
            cookies=auth_cookie(BOB),
        )

        # Act
        response = client.get(f"/polls/{poll['poll_id']}/options")

        # Assert
        assert response.status_code == 200
        assert [(o["text"], o["vote_count"]) for o in response.json()] == [
            ("Green", 0),
            ("Black", 1),
        ]

    def test_options_of_missing_poll_not_found(self, client):
        response = client.get("/polls/999/options")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"


class TestSearchEndpoint:
    """Substring search over posts."""

    def test_search_with_type_filter(self, client):
        # Arrange
        _create_post(client, title="Weekend hiking", body="")
        client.post(
            "/polls",
            json={"title": "Hiking or cycling?", "options": ["Hike", "Cycle"]},
            cookies=auth_cookie(ALICE),
        )
        _create_post(client, title="Unrelated", body="nothing here")

        # Act
        everything = client.get("/posts/search", params={"q": "HIKING"})
        polls_only = client.get("/posts/search", params={"q": "hiking", "type": "poll"})

        # Assert
        assert everything.status_code == 200
        assert everything.json()["total"] == 2
        assert [p["title"] for p in polls_only.json()["posts"]] == ["Hiking or cycling?"]

    def test_search_marks_callers_votes(self, client):
        post = _create_post(client, title="Vote me")
        client.post(f"/posts/{post['post_id']}/upvote", cookies=auth_cookie(BOB))

        response = client.get(
            "/posts/search", params={"q": "vote"}, cookies=auth_cookie(BOB)
        )

        assert response.json()["posts"][0]["was_upvoted"] is True

    def test_missing_query_is_rejected(self, client):
        response = client.get("/posts/search")

        assert response.status_code == 422

    def test_blank_query_is_bad_request(self, client):
        response = client.get("/posts/search", params={"q": "   "})

        assert response.status_code == 400
        assert response.json()["error"] == "invalid_input"


class TestUserEndpoints:
    """Per-user activity listings."""

    def test_user_posts_and_comments(self, client):
        # Arrange
        alice_post = _create_post(client, user_id=ALICE, title="From Alice")
        _create_post(client, user_id=BOB, title="From Bob")
        client.post(
            f"/posts/{alice_post['post_id']}/comments",
            json={"body": "Nice one"},
            cookies=auth_cookie(BOB),
        )

        # Act
        posts = client.get(f"/users/{ALICE}/posts")
        comments = client.get(f"/users/{BOB}/comments")

        # Assert
        assert posts.status_code == 200
        assert [p["title"] for p in posts.json()["posts"]] == ["From Alice"]
        assert comments.status_code == 200
        body = comments.json()
        assert body["total"] == 1
        assert body["comments"][0]["post_id"] == alice_post["post_id"]
        assert body["comments"][0]["body"] == "Nice one"

    def test_unknown_user_has_empty_history(self, client):
        response = client.get("/users/42/comments")

        assert response.status_code == 200
        assert response.json()["comments"] == []
