"""
Twitter clone endpoints (``twitter`` service).

``POST /register/`` and ``POST /login/`` are public; every other route
requires the token returned by the login.  A tweet, its likes and its
replies can only be read by users who follow the tweet's author
(``readable_tweet``).
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import PlainTextResponse

from crud_services_api.app.core.security import INVALID_TOKEN_MESSAGE, issue_token, require_token
from crud_services_api.app.schemas.tweet import (
    FeedTweet,
    TweetCreate,
    TweetLikes,
    TweetReplies,
    TweetSummary,
    UserName,
)
from crud_services_api.app.schemas.user import TokenResponse, TwitterUserCreate, UserLogin
from crud_services_api.app.services.tweet_service import TweetService
from crud_services_api.app.services.user_service import TwitterUserService

SERVICE = "twitter"
INVALID_REQUEST = "Invalid Request"

router = APIRouter()


async def current_user_id(username: str = Depends(require_token(SERVICE))) -> int:
    """Resolve the token's username to a ``user_id``.

    A valid token whose user no longer exists is refused like an
    invalid token.
    """
    user_id = await TwitterUserService.get_user_id(username)
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=INVALID_TOKEN_MESSAGE,
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user_id


async def readable_tweet(tweet_id: int, user_id: int = Depends(current_user_id)) -> int:
    """Return ``tweet_id`` if the caller follows the tweet's author.

    Unknown tweets give HTTP 404, tweets of users the caller does not
    follow give HTTP 401 ``Invalid Request``.
    """
    author_id = await TweetService.get_tweet_author(tweet_id)
    if author_id is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Tweet not found")
    if not await TweetService.is_following(user_id, author_id):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_REQUEST)
    return tweet_id


@router.post("/register/", response_class=PlainTextResponse)
async def register(user: TwitterUserCreate) -> str:
    """Register a user; passwords need at least six characters."""
    try:
        await TwitterUserService.create_user(user)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    return "User created successfully"


@router.post("/login/", response_model=TokenResponse)
async def login(credentials: UserLogin) -> TokenResponse:
    try:
        await TwitterUserService.authenticate(credentials.username, credentials.password)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    return TokenResponse(jwt_token=issue_token(credentials.username, SERVICE))


@router.get("/user/tweets/feed/", response_model=List[FeedTweet])
async def get_feed(user_id: int = Depends(current_user_id)) -> List[FeedTweet]:
    """Latest four tweets of the people the caller follows."""
    return await TweetService.get_feed(user_id)


@router.get("/user/following/", response_model=List[UserName])
async def list_following(user_id: int = Depends(current_user_id)) -> List[UserName]:
    return await TweetService.list_following(user_id)


@router.get("/user/followers/", response_model=List[UserName])
async def list_followers(user_id: int = Depends(current_user_id)) -> List[UserName]:
    return await TweetService.list_followers(user_id)


@router.get("/tweets/{tweet_id}/", response_model=TweetSummary)
async def get_tweet(tweet_id: int = Depends(readable_tweet)) -> TweetSummary:
    summary = await TweetService.get_tweet_summary(tweet_id)
    if summary is None:
        # Deleted between the access check and this query
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Tweet not found")
    return summary


@router.get("/tweets/{tweet_id}/likes/", response_model=TweetLikes)
async def get_tweet_likes(tweet_id: int = Depends(readable_tweet)) -> TweetLikes:
    """Usernames of the users who liked the tweet."""
    return TweetLikes(likes=await TweetService.list_likers(tweet_id))


@router.get("/tweets/{tweet_id}/replies/", response_model=TweetReplies)
async def get_tweet_replies(tweet_id: int = Depends(readable_tweet)) -> TweetReplies:
    return TweetReplies(replies=await TweetService.list_replies(tweet_id))


@router.get("/user/tweets/", response_model=List[TweetSummary])
async def list_own_tweets(user_id: int = Depends(current_user_id)) -> List[TweetSummary]:
    """The caller's tweets with like and reply counts."""
    return await TweetService.list_user_tweets(user_id)


@router.post("/user/tweets/", response_class=PlainTextResponse)
async def create_tweet(body: TweetCreate, user_id: int = Depends(current_user_id)) -> str:
    await TweetService.create_tweet(user_id, body.tweet)
    return "Created a Tweet"


@router.delete("/tweets/{tweet_id}/", response_class=PlainTextResponse)
async def delete_tweet(tweet_id: int, user_id: int = Depends(current_user_id)) -> str:
    """Delete one of the caller's tweets.

    Tweets that do not exist or belong to someone else are refused
    with HTTP 401 ``Invalid Request``.
    """
    if not await TweetService.delete_tweet(user_id, tweet_id):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_REQUEST)
    return "Tweet Removed"
