"""User aggregate root.

A user is the library member admitted by the access gate. The email, when
the provider shares one, is unique across users.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from shelf.domain.model.common import DomainModel, utcnow
from shelf.domain.value import Email, UserId


class User(DomainModel):
    """Library member, independent of the provider used to sign in."""

    id: UserId
    email: Optional[Email] = None
    display_name: str = Field(min_length=1, max_length=255)
    avatar_url: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
