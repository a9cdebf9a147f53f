"""
Business logic for the Twitter clone.

Users follow each other through the ``follower`` table
(``follower_user_id`` follows ``following_user_id``).  A user may
read a tweet, its likes and its replies only when following the
tweet's author; that rule is enforced by the endpoints with
``get_tweet_author`` and ``is_following``.

Like and reply counts are computed with correlated subqueries so a
tweet with both likes and replies is not counted twice.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from ..core.db import get_connection
from ..schemas.tweet import FeedTweet, ReplyRead, TweetSummary, UserName

logger = logging.getLogger(__name__)

FEED_SIZE = 4

_SUMMARY_COLUMNS = """
    t.tweet,
    (SELECT COUNT(*) FROM "like" l WHERE l.tweet_id = t.tweet_id) AS likes,
    (SELECT COUNT(*) FROM reply r WHERE r.tweet_id = t.tweet_id) AS replies,
    t.date_time
"""


def _now() -> str:
    """Current UTC time in SQLite's ``datetime('now')`` format."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")


class TweetService:
    """Service for tweets, follows, likes and replies."""

    database: str = "twitter"

    @classmethod
    async def get_feed(cls, user_id: int, limit: int = FEED_SIZE) -> List[FeedTweet]:
        """Return the latest tweets of the users ``user_id`` follows, newest first."""
        conn = get_connection(cls.database)
        try:
            rows = conn.execute(
                """
                SELECT u.username, t.tweet, t.date_time
                FROM follower f
                JOIN tweet t ON f.following_user_id = t.user_id
                JOIN user u ON t.user_id = u.user_id
                WHERE f.follower_user_id = ?
                ORDER BY t.date_time DESC, t.tweet_id DESC
                LIMIT ?
                """,
                (user_id, limit),
            ).fetchall()
            return [FeedTweet.model_validate(dict(row)) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def list_following(cls, user_id: int) -> List[UserName]:
        """Names of the users ``user_id`` follows."""
        conn = get_connection(cls.database)
        try:
            rows = conn.execute(
                """
                SELECT u.name FROM follower f
                JOIN user u ON f.following_user_id = u.user_id
                WHERE f.follower_user_id = ?
                ORDER BY u.user_id
                """,
                (user_id,),
            ).fetchall()
            return [UserName(name=row["name"]) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def list_followers(cls, user_id: int) -> List[UserName]:
        """Names of the users following ``user_id``."""
        conn = get_connection(cls.database)
        try:
            rows = conn.execute(
                """
                SELECT u.name FROM follower f
                JOIN user u ON f.follower_user_id = u.user_id
                WHERE f.following_user_id = ?
                ORDER BY u.user_id
                """,
                (user_id,),
            ).fetchall()
            return [UserName(name=row["name"]) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def get_tweet_author(cls, tweet_id: int) -> Optional[int]:
        """Return the ``user_id`` who posted the tweet, or ``None``."""
        conn = get_connection(cls.database)
        try:
            row = conn.execute("SELECT user_id FROM tweet WHERE tweet_id = ?", (tweet_id,)).fetchone()
            return row["user_id"] if row else None
        finally:
            conn.close()

    @classmethod
    async def is_following(cls, follower_user_id: int, following_user_id: int) -> bool:
        conn = get_connection(cls.database)
        try:
            row = conn.execute(
                "SELECT 1 FROM follower WHERE follower_user_id = ? AND following_user_id = ?",
                (follower_user_id, following_user_id),
            ).fetchone()
            return row is not None
        finally:
            conn.close()

    @classmethod
    async def get_tweet_summary(cls, tweet_id: int) -> Optional[TweetSummary]:
        conn = get_connection(cls.database)
        try:
            row = conn.execute(
                f"SELECT {_SUMMARY_COLUMNS} FROM tweet t WHERE t.tweet_id = ?",
                (tweet_id,),
            ).fetchone()
            return TweetSummary.model_validate(dict(row)) if row else None
        finally:
            conn.close()

    @classmethod
    async def list_likers(cls, tweet_id: int) -> List[str]:
        """Usernames of the users who liked the tweet."""
        conn = get_connection(cls.database)
        try:
            rows = conn.execute(
                """
                SELECT u.username FROM "like" l
                JOIN user u ON l.user_id = u.user_id
                WHERE l.tweet_id = ?
                ORDER BY l.like_id
                """,
                (tweet_id,),
            ).fetchall()
            return [row["username"] for row in rows]
        finally:
            conn.close()

    @classmethod
    async def list_replies(cls, tweet_id: int) -> List[ReplyRead]:
        conn = get_connection(cls.database)
        try:
            rows = conn.execute(
                """
                SELECT u.name, r.reply FROM reply r
                JOIN user u ON r.user_id = u.user_id
                WHERE r.tweet_id = ?
                ORDER BY r.reply_id
                """,
                (tweet_id,),
            ).fetchall()
            return [ReplyRead.model_validate(dict(row)) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def list_user_tweets(cls, user_id: int) -> List[TweetSummary]:
        """Every tweet posted by ``user_id`` with its like and reply counts."""
        conn = get_connection(cls.database)
        try:
            rows = conn.execute(
                f"SELECT {_SUMMARY_COLUMNS} FROM tweet t WHERE t.user_id = ? ORDER BY t.tweet_id",
                (user_id,),
            ).fetchall()
            return [TweetSummary.model_validate(dict(row)) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def create_tweet(cls, user_id: int, text: str) -> int:
        conn = get_connection(cls.database)
        try:
            cursor = conn.cursor()
            cursor.execute(
                "INSERT INTO tweet (tweet, user_id, date_time) VALUES (?, ?, ?)",
                (text, user_id, _now()),
            )
            tweet_id = cursor.lastrowid
            conn.commit()
            logger.info("User %s posted tweet %s", user_id, tweet_id)
            return tweet_id
        finally:
            conn.close()

    @classmethod
    async def delete_tweet(cls, user_id: int, tweet_id: int) -> bool:
        """Delete a tweet owned by ``user_id`` together with its likes and replies.

        Returns ``False`` if the tweet does not exist or belongs to
        somebody else; nothing is deleted in that case.
        """
        conn = get_connection(cls.database)
        try:
            cursor = conn.cursor()
            owned = cursor.execute(
                "SELECT 1 FROM tweet WHERE tweet_id = ? AND user_id = ?",
                (tweet_id, user_id),
            ).fetchone()
            if not owned:
                return False
            cursor.execute('DELETE FROM "like" WHERE tweet_id = ?', (tweet_id,))
            cursor.execute("DELETE FROM reply WHERE tweet_id = ?", (tweet_id,))
            cursor.execute("DELETE FROM tweet WHERE tweet_id = ?", (tweet_id,))
            conn.commit()
            logger.info("User %s removed tweet %s", user_id, tweet_id)
            return True
        finally:
            conn.close()
