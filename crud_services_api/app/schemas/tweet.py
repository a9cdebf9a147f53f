"""
Pydantic models for the Twitter clone.

Timestamps are kept as the text stored in the database
(``YYYY-MM-DD HH:MM:SS``) and sent as ``dateTime``.  A display name
is optional at registration, so ``name`` may be ``null``.
"""

from typing import List, Optional

from pydantic import Field

from .base import CamelModel


class TweetCreate(CamelModel):
    tweet: str = Field(..., min_length=1, examples=["The cat is walking on the wall"])


class FeedTweet(CamelModel):
    username: str
    tweet: str
    date_time: str


class TweetSummary(CamelModel):
    """A tweet with its like and reply counts."""

    tweet: str
    likes: int
    replies: int
    date_time: str


class UserName(CamelModel):
    name: Optional[str] = None


class TweetLikes(CamelModel):
    likes: List[str]


class ReplyRead(CamelModel):
    name: Optional[str] = None
    reply: str


class TweetReplies(CamelModel):
    replies: List[ReplyRead]
