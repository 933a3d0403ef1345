# photofeed/models/comment.py
from dataclasses import dataclass, field
from datetime import datetime

from photofeed.utils.datetime_utils import DateTimeUtils


@dataclass
class Comment:
    """
    A comment embedded in a Post document's `comments` list. Never stored on its own.
    """
    comment_id: str
    owner: str
    text: str
    created_at: datetime = field(default_factory=DateTimeUtils.now)
