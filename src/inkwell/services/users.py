"""User profiles and username assignment."""

from __future__ import annotations

from typing import Any

import structlog

from inkwell.core.config import BlogConfig
from inkwell.core.errors import NotFound, ValidationError
from inkwell.core.slug import USER_FALLBACK, SlugGenerator, normalize
from inkwell.identifiers import IdentifierAssignmentService
from inkwell.models import User
from inkwell.services.storage import PostRepository, UserRepository

from .auth import AuthProvider, require_user
from .views import ProfileView

logger = structlog.get_logger()


class UserService:
    """Profile creation, lookup by username and profile editing."""

    def __init__(
        self,
        config: BlogConfig,
        users: UserRepository,
        posts: PostRepository,
        auth: AuthProvider,
    ) -> None:
        self.config = config
        self.users = users
        self.posts = posts
        self.auth = auth
        self.usernames = IdentifierAssignmentService(
            users,
            SlugGenerator(USER_FALLBACK, config.slug_max_length),
            config.slug_max_attempts,
        )

    def validate_username(self, username: str) -> str:
        """Check an explicitly chosen username and return it unchanged.

        Raises:
            ValidationError: If the length is out of bounds or the value is not
                already in canonical slug form.
        """
        value = username.strip()
        low, high = self.config.username_min_length, self.config.username_max_length
        if not low <= len(value) <= high:
            raise ValidationError(
                "username", f"Username must be between {low} and {high} characters"
            )
        if normalize(value, "") != value:
            raise ValidationError(
                "username",
                "Username may only contain lowercase letters, numbers and single hyphens",
            )
        return value

    async def _claim_username(self, username: str, user_id: str | None) -> str:
        value = self.validate_username(username)
        holder = await self.users.find_by_token(value)
        if holder is not None and holder.entity_id != user_id:
            raise ValidationError("username", "Username is already taken")
        return value

    async def create_user(
        self,
        name: str | None = None,
        email: str | None = None,
        username: str | None = None,
    ) -> User:
        """Create the profile for a newly issued identity.

        This is the signup hook the identity issuer calls before anyone is
        signed in, so it does not consult the auth provider. The caller signs
        the new identity in with the returned ``user.id``.
        """
        if email and await self.users.get_by_email(email):
            raise ValidationError("email", f"Account with email {email} already exists")

        chosen = bool(username and username.strip())
        if chosen:
            token = await self._claim_username(username, None)
        else:
            token = await self.usernames.assign_on_create(name)

        user = await self.users.insert(
            User(name=name or None, email=email or None, username=token, username_chosen=chosen)
        )
        logger.info("user_created", user_id=user.id, username=token)
        return user

    async def me(self) -> User | None:
        user_id = self.auth.get_current_user_id()
        if not user_id:
            return None
        return await self.users.get(user_id)

    async def get_by_username(self, username: str) -> ProfileView | None:
        """Public profile for a username, including legacy users matched by name."""
        entry = await self.usernames.resolve_on_read(username)
        if entry is None:
            return None
        user = await self.users.get(entry.entity_id)
        if user is None:
            return None
        return ProfileView(
            user=user,
            posts=await self.posts.list_by_author(user.id),
            is_self=user.id == self.auth.get_current_user_id(),
            needs_backfill=user.username is None,
        )

    async def update_profile(
        self,
        name: str | None = None,
        bio: str | None = None,
        image: str | None = None,
        username: str | None = None,
    ) -> User:
        """Edit the current user's profile; blank strings clear optional fields.

        A name change re-derives the username unless the user picked it.
        """
        user_id = require_user(self.auth)
        user = await self.users.get(user_id)
        if user is None:
            raise NotFound("user", user_id)

        patch: dict[str, Any] = {}
        if name is not None:
            patch["name"] = name.strip() or None
        if bio is not None:
            bio = bio.strip()
            if len(bio) > self.config.bio_max_length:
                raise ValidationError(
                    "bio", f"Bio must be at most {self.config.bio_max_length} characters"
                )
            patch["bio"] = bio or None
        if image is not None:
            patch["image"] = image.strip() or None

        renamed = bool(patch.get("name")) and patch["name"] != user.name
        if username is not None and username.strip():
            patch["username"] = await self._claim_username(username, user_id)
            patch["username_chosen"] = True
        elif user.username is None or (renamed and not user.username_chosen):
            patch["username"] = await self.usernames.assign_on_rename(
                user_id, patch.get("name", user.name)
            )

        if not patch:
            return user
        updated = await self.users.patch(user_id, patch)
        if updated is None:
            raise NotFound("user", user_id)
        logger.info("profile_updated", user_id=user_id, fields=sorted(patch))
        return updated

    async def ensure_username(self, user_id: str) -> str:
        """Persist a username on a legacy profile; returns the stored username."""
        user = await self.users.get(user_id)
        if user is None:
            raise NotFound("user", user_id)
        if user.username:
            return user.username

        token = await self.usernames.assign_on_rename(user_id, user.name)
        await self.users.patch(user_id, {"username": token})
        logger.info("username_backfilled", user_id=user_id, username=token)
        return token
