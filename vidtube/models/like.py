"""
Like Models
"""
from enum import Enum

from vidtube.models.common import CamelModel


class LikeTarget(str, Enum):
    """Entity kinds that can be liked"""
    VIDEO = "video"
    COMMENT = "comment"
    TWEET = "tweet"


class LikeToggleResponse(CamelModel):
    """Resulting state of a like toggle"""
    state: bool
    like_count: int
