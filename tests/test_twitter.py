"""Tests for the Twitter clone service."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from conftest import fetch_all, seed
from crud_services_api.app.core.security import issue_token

PASSWORD = "joe@123"
USERS = [
    ("JoeBiden", "Joe Biden"),
    ("ElonMusk", "Elon Musk"),
    ("NarendraModi", "Narendra Modi"),
    ("DonaldTrump", "Donald Trump"),
]


@pytest.fixture
def client(client_for) -> TestClient:
    client = client_for("twitter")
    for username, name in USERS:
        response = client.post(
            "/register/",
            json={"username": username, "password": PASSWORD, "name": name, "gender": "male"},
        )
        assert response.status_code == 200
    # JoeBiden(1) follows ElonMusk(2) and NarendraModi(3); ElonMusk follows JoeBiden
    seed(
        "twitter",
        "INSERT INTO follower (follower_user_id, following_user_id) VALUES (?, ?)",
        [(1, 2), (1, 3), (2, 1)],
    )
    seed(
        "twitter",
        "INSERT INTO tweet (tweet_id, tweet, user_id, date_time) VALUES (?, ?, ?, ?)",
        [
            (1, "The Mornings...", 2, "2021-04-07 14:50:15"),
            (2, "Ready to don the Green and Gold.", 3, "2021-04-07 15:02:00"),
            (3, "Big day at the launch pad", 2, "2021-04-08 09:00:00"),
            (4, "Namaste", 3, "2021-04-09 10:30:00"),
            (5, "Going to Mars", 2, "2021-04-10 08:15:00"),
            (6, "Not in anyone's feed", 4, "2021-04-11 12:00:00"),
            (7, "Hello from Joe", 1, "2021-04-06 11:00:00"),
        ],
    )
    seed(
        "twitter",
        'INSERT INTO "like" (tweet_id, user_id, date_time) VALUES (?, ?, ?)',
        [(1, 1, "2021-04-07 15:00:00"), (1, 3, "2021-04-07 16:00:00"), (7, 2, "2021-04-06 12:00:00")],
    )
    seed(
        "twitter",
        "INSERT INTO reply (tweet_id, reply, user_id, date_time) VALUES (?, ?, ?, ?)",
        [(1, "Good morning!", 1, "2021-04-07 15:05:00"), (7, "Hi Joe", 2, "2021-04-06 12:30:00")],
    )
    return client


def login(client: TestClient, username: str = "JoeBiden") -> dict:
    response = client.post("/login/", json={"username": username, "password": PASSWORD})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['jwtToken']}"}


def test_register_errors(client: TestClient) -> None:
    taken = client.post("/register/", json={"username": "JoeBiden", "password": "another1", "name": "Joe"})
    short = client.post("/register/", json={"username": "Kamala", "password": "abc", "name": "Kamala"})

    assert (taken.status_code, taken.text) == (400, "User already exists")
    assert (short.status_code, short.text) == (400, "Password is too short")


def test_login_errors(client: TestClient) -> None:
    unknown = client.post("/login/", json={"username": "ghost", "password": PASSWORD})
    wrong = client.post("/login/", json={"username": "JoeBiden", "password": "wrong_pass"})

    assert (unknown.status_code, unknown.text) == (400, "Invalid user")
    assert (wrong.status_code, wrong.text) == (400, "Invalid password")


@pytest.mark.parametrize(
    "path",
    ["/user/tweets/feed/", "/user/following/", "/user/followers/", "/tweets/1/", "/user/tweets/"],
)
def test_protected_routes_require_token(client: TestClient, path: str) -> None:
    response = client.get(path)

    assert (response.status_code, response.text) == (401, "Invalid JWT Token")


def test_token_of_another_service_is_refused(client: TestClient) -> None:
    token = issue_token("JoeBiden", "covid_portal")

    response = client.get("/user/following/", headers={"Authorization": f"Bearer {token}"})

    assert (response.status_code, response.text) == (401, "Invalid JWT Token")


def test_token_of_unknown_user_is_refused(client: TestClient) -> None:
    token = issue_token("KamalaHarris", "twitter")

    response = client.get("/user/following/", headers={"Authorization": f"Bearer {token}"})

    assert (response.status_code, response.text) == (401, "Invalid JWT Token")


def test_feed_is_latest_four_of_followed_users(client: TestClient) -> None:
    response = client.get("/user/tweets/feed/", headers=login(client))

    assert response.status_code == 200
    assert response.json() == [
        {"username": "ElonMusk", "tweet": "Going to Mars", "dateTime": "2021-04-10 08:15:00"},
        {"username": "NarendraModi", "tweet": "Namaste", "dateTime": "2021-04-09 10:30:00"},
        {"username": "ElonMusk", "tweet": "Big day at the launch pad", "dateTime": "2021-04-08 09:00:00"},
        {"username": "NarendraModi", "tweet": "Ready to don the Green and Gold.", "dateTime": "2021-04-07 15:02:00"},
    ]


def test_following_and_followers(client: TestClient) -> None:
    headers = login(client)

    following = client.get("/user/following/", headers=headers)
    followers = client.get("/user/followers/", headers=headers)

    assert following.json() == [{"name": "Elon Musk"}, {"name": "Narendra Modi"}]
    assert followers.json() == [{"name": "Elon Musk"}]


def test_users_without_a_name_are_listed(client: TestClient) -> None:
    response = client.post("/register/", json={"username": "bob", "password": PASSWORD})
    assert response.status_code == 200
    # bob(5) follows JoeBiden and JoeBiden follows bob; bob replies to tweet 1
    seed(
        "twitter",
        "INSERT INTO follower (follower_user_id, following_user_id) VALUES (?, ?)",
        [(5, 1), (1, 5)],
    )
    seed(
        "twitter",
        "INSERT INTO reply (tweet_id, reply, user_id, date_time) VALUES (?, ?, ?, ?)",
        [(1, "Morning", 5, "2021-04-07 15:10:00")],
    )
    headers = login(client)

    following = client.get("/user/following/", headers=headers)
    followers = client.get("/user/followers/", headers=headers)
    replies = client.get("/tweets/1/replies/", headers=headers)

    assert following.status_code == 200
    assert following.json()[-1] == {"name": None}
    assert followers.json() == [{"name": "Elon Musk"}, {"name": None}]
    assert replies.json()["replies"][-1] == {"name": None, "reply": "Morning"}


def test_get_tweet_of_followed_user(client: TestClient) -> None:
    response = client.get("/tweets/1/", headers=login(client))

    assert response.json() == {
        "tweet": "The Mornings...",
        "likes": 2,
        "replies": 1,
        "dateTime": "2021-04-07 14:50:15",
    }


def test_tweet_of_unfollowed_user_is_invalid_request(client: TestClient) -> None:
    headers = login(client)

    for path in ("/tweets/6/", "/tweets/6/likes/", "/tweets/6/replies/"):
        response = client.get(path, headers=headers)
        assert (response.status_code, response.text) == (401, "Invalid Request")


def test_unknown_tweet_is_not_found(client: TestClient) -> None:
    response = client.get("/tweets/99/", headers=login(client))

    assert (response.status_code, response.text) == (404, "Tweet not found")


def test_tweet_likes_and_replies(client: TestClient) -> None:
    headers = login(client)

    likes = client.get("/tweets/1/likes/", headers=headers)
    replies = client.get("/tweets/1/replies/", headers=headers)

    assert likes.json() == {"likes": ["JoeBiden", "NarendraModi"]}
    assert replies.json() == {"replies": [{"name": "Joe Biden", "reply": "Good morning!"}]}


def test_own_tweets(client: TestClient) -> None:
    response = client.get("/user/tweets/", headers=login(client))

    assert response.json() == [
        {"tweet": "Hello from Joe", "likes": 1, "replies": 1, "dateTime": "2021-04-06 11:00:00"},
    ]


def test_create_tweet(client: TestClient) -> None:
    headers = login(client)

    response = client.post("/user/tweets/", json={"tweet": "The cat is walking on the wall"}, headers=headers)

    assert (response.status_code, response.text) == (200, "Created a Tweet")
    tweets = client.get("/user/tweets/", headers=headers).json()
    assert [t["tweet"] for t in tweets] == ["Hello from Joe", "The cat is walking on the wall"]
    assert tweets[1]["likes"] == 0
    # Visible in the feed of a follower
    feed = client.get("/user/tweets/feed/", headers=login(client, "ElonMusk")).json()
    assert feed[0]["tweet"] == "The cat is walking on the wall"


def test_create_tweet_requires_text(client: TestClient) -> None:
    response = client.post("/user/tweets/", json={"tweet": ""}, headers=login(client))

    assert response.status_code == 400


def test_delete_own_tweet_removes_likes_and_replies(client: TestClient) -> None:
    response = client.delete("/tweets/7/", headers=login(client))

    assert (response.status_code, response.text) == (200, "Tweet Removed")
    assert fetch_all("twitter", "SELECT * FROM tweet WHERE tweet_id = 7") == []
    assert fetch_all("twitter", 'SELECT * FROM "like" WHERE tweet_id = 7') == []
    assert fetch_all("twitter", "SELECT * FROM reply WHERE tweet_id = 7") == []


def test_delete_tweet_of_someone_else_is_refused(client: TestClient) -> None:
    someone_else = client.delete("/tweets/1/", headers=login(client))
    missing = client.delete("/tweets/99/", headers=login(client))

    assert (someone_else.status_code, someone_else.text) == (401, "Invalid Request")
    assert (missing.status_code, missing.text) == (401, "Invalid Request")
    assert len(fetch_all("twitter", "SELECT * FROM tweet WHERE tweet_id = 1")) == 1
