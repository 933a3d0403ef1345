# photofeed/models/post.py
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, List, Dict, Any

from photofeed.utils.datetime_utils import DateTimeUtils


@dataclass
class Post:
    """
    Document structure of the Firestore 'posts' collection.
    `likes` holds user ids without duplicates; `comments` holds embedded Comment maps in insertion order.
    """
    post_id: str
    owner: str
    image: str
    caption: Optional[str] = None
    likes: List[str] = field(default_factory=list)
    comments: List[Dict[str, Any]] = field(default_factory=list)
    created_at: datetime = field(default_factory=DateTimeUtils.now)
    updated_at: datetime = field(default_factory=DateTimeUtils.now)
