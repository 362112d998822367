"""User identity entity.

Links an external authentication account to a user.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from shelf.domain.model.common import DomainModel, utcnow
from shelf.domain.value import AuthProvider, UserId, UserIdentityId


class UserIdentity(DomainModel):
    """Provider account linked to a user.

    ``provider_user_id`` is the permanent account ID and is unique per
    provider; the handle may change over time.
    """

    id: UserIdentityId
    user_id: UserId
    provider: AuthProvider
    provider_user_id: str
    provider_handle: str
    provider_email: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    last_login_at: Optional[datetime] = None
