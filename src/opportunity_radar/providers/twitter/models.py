"""Models for the Twitter v2 recent-search endpoint (params and response)."""
from datetime import datetime

from pydantic import BaseModel, Field


class RecentSearchParams(BaseModel):
    """Params for /2/tweets/search/recent. Merge with 'query' at call site."""

    max_results: int = 10
    expansions: str = "author_id"
    user_fields: str = Field(default="public_metrics", serialization_alias="user.fields")
    tweet_fields: str = Field(
        default="public_metrics,created_at", serialization_alias="tweet.fields"
    )

    model_config = {"populate_by_name": True}


class TweetMetrics(BaseModel):
    retweet_count: int = 0
    like_count: int = 0
    reply_count: int = 0
    quote_count: int = 0


class Tweet(BaseModel):
    id: str
    text: str
    author_id: str | None = None
    created_at: datetime | None = None
    public_metrics: TweetMetrics = Field(default_factory=TweetMetrics)


class UserMetrics(BaseModel):
    followers_count: int = 0


class User(BaseModel):
    id: str
    username: str
    public_metrics: UserMetrics = Field(default_factory=UserMetrics)


class Includes(BaseModel):
    users: list[User] = Field(default_factory=list)


class RecentSearchResponse(BaseModel):
    """`data` is absent when nothing matched."""

    data: list[Tweet] = Field(default_factory=list)
    includes: Includes = Field(default_factory=Includes)

    def author(self, tweet: Tweet) -> User | None:
        return next((u for u in self.includes.users if u.id == tweet.author_id), None)
