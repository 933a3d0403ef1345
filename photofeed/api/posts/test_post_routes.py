# photofeed/api/posts/test_post_routes.py
import pytest
from google.api_core.exceptions import ServiceUnavailable


@pytest.fixture
def alice(make_user):
    return make_user("alice", profile_picture="alice.png")


@pytest.fixture
def bob(make_user):
    return make_user("bob")


def _create(client, headers, **body):
    return client.post('/api/posts/create', json=body, headers=headers)


def test_create_post(client, alice, auth_headers):
    response = _create(client, auth_headers(alice["user_id"]), image="a.jpg")

    assert response.status_code == 201
    post = response.get_json()["post"]
    assert post["owner"] == alice["user_id"]
    assert post["image"] == "a.jpg"
    assert post["caption"] is None
    assert post["likes"] == []
    assert post["comments"] == []
    assert post["id"] and post["createdAt"] and post["updatedAt"]


def test_create_post_without_image(client, alice, auth_headers, fake_db):
    response = _create(client, auth_headers(alice["user_id"]), caption="no picture")

    assert response.status_code == 400
    assert response.get_json()["message"] == "Image is required"
    assert list(fake_db.collection("posts").stream()) == []


def test_create_post_caption_too_long(client, alice, auth_headers):
    response = _create(client, auth_headers(alice["user_id"]), image="a.jpg", caption="x" * 501)
    assert response.status_code == 400


def test_feed_is_reverse_chronological(client, alice, bob, auth_headers):
    ids = []
    for index, user in enumerate([alice, bob, alice]):
        response = _create(client, auth_headers(user["user_id"]), image=f"{index}.jpg")
        ids.append(response.get_json()["post"]["id"])

    response = client.get('/api/posts/feed', headers=auth_headers(bob["user_id"]))

    assert response.status_code == 200
    feed = response.get_json()
    assert [p["id"] for p in feed] == list(reversed(ids))
    assert feed[0]["owner"] == {"id": alice["user_id"], "username": "alice", "profilePicture": "alice.png"}
    assert feed[1]["owner"]["username"] == "bob"


def test_like_toggles(client, alice, bob, auth_headers):
    post_id = _create(client, auth_headers(alice["user_id"]), image="a.jpg").get_json()["post"]["id"]
    url = f'/api/posts/{post_id}/like'

    first = client.post(url, headers=auth_headers(bob["user_id"]))
    second = client.post(url, headers=auth_headers(bob["user_id"]))

    assert first.status_code == 200
    assert first.get_json()["likes"] == 1
    assert second.get_json()["likes"] == 0


def test_like_missing_post(client, alice, auth_headers):
    response = client.post('/api/posts/missing/like', headers=auth_headers(alice["user_id"]))
    assert response.status_code == 404


def test_comment_appends(client, alice, bob, auth_headers):
    post_id = _create(client, auth_headers(alice["user_id"]), image="a.jpg").get_json()["post"]["id"]

    response = client.post(f'/api/posts/{post_id}/comment', json={"text": "hi"}, headers=auth_headers(bob["user_id"]))

    assert response.status_code == 200
    comments = response.get_json()["comments"]
    assert len(comments) == 1
    assert comments[0]["owner"] == bob["user_id"]
    assert comments[0]["text"] == "hi"


@pytest.mark.parametrize("body", [{}, {"text": ""}, {"text": "   "}])
def test_empty_comment_is_rejected_without_mutation(client, alice, auth_headers, post_store, body):
    post_id = _create(client, auth_headers(alice["user_id"]), image="a.jpg").get_json()["post"]["id"]

    response = client.post(f'/api/posts/{post_id}/comment', json=body, headers=auth_headers(alice["user_id"]))

    assert response.status_code == 400
    assert response.get_json()["message"] == "Comment cannot be empty"
    assert post_store.get(post_id)["comments"] == []


def test_comment_on_missing_post(client, alice, auth_headers):
    response = client.post('/api/posts/missing/comment', json={"text": "hi"}, headers=auth_headers(alice["user_id"]))
    assert response.status_code == 404


@pytest.mark.parametrize("method, path, body", [
    ("post", "/api/posts/create", {"image": "a.jpg"}),
    ("get", "/api/posts/feed", None),
    ("post", "/api/posts/{post_id}/like", None),
    ("post", "/api/posts/{post_id}/comment", {"text": "hi"}),
])
def test_unauthenticated_requests_are_rejected(client, post_store, method, path, body):
    post = post_store.create("owner-1", image="a.jpg")
    url = path.format(post_id=post["post_id"])

    missing = getattr(client, method)(url, json=body)
    invalid = getattr(client, method)(url, json=body, headers={"Authorization": "Bearer forged.token.value"})

    assert missing.status_code == 401
    assert missing.get_json()["message"] == "no token"
    assert invalid.status_code == 401
    assert invalid.get_json()["message"] == "invalid token"

    stored = post_store.get(post["post_id"])
    assert stored["likes"] == [] and stored["comments"] == []
    assert len(post_store.list_feed()) == 1


def test_store_failure_is_reported_as_500(client, alice, auth_headers, fake_db):
    headers = auth_headers(alice["user_id"])
    fake_db.fail_with = ServiceUnavailable("firestore unavailable")

    response = client.get('/api/posts/feed', headers=headers)

    assert response.status_code == 500
    assert "firestore unavailable" in response.get_json()["error"]


def test_like_and_comment_scenario(client, make_user, auth_headers):
    owner, u1, u2 = make_user("owner"), make_user("user_one"), make_user("user_two")

    created = _create(client, auth_headers(owner["user_id"]), image="a.jpg")
    assert created.status_code == 201
    post = created.get_json()["post"]
    assert post["likes"] == [] and post["comments"] == []
    like_url = f'/api/posts/{post["id"]}/like'

    assert client.post(like_url, headers=auth_headers(u1["user_id"])).get_json()["likes"] == 1
    assert client.post(like_url, headers=auth_headers(u1["user_id"])).get_json()["likes"] == 0

    response = client.post(f'/api/posts/{post["id"]}/comment', json={"text": "hi"}, headers=auth_headers(u2["user_id"]))
    comments = response.get_json()["comments"]
    assert len(comments) == 1
    assert comments[0]["owner"] == u2["user_id"] and comments[0]["text"] == "hi"
