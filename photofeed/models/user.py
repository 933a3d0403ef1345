# photofeed/models/user.py
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from photofeed.utils.datetime_utils import DateTimeUtils


@dataclass
class User:
    """
    Document structure of the Firestore 'users' collection.
    """
    user_id: str
    username: str
    password_hash: str
    email: Optional[str] = None
    profile_picture: str = ""
    created_at: datetime = field(default_factory=DateTimeUtils.now)
