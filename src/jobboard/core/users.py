"""User accounts and the active session.

The directory merges two tiers at query time: a fixed list of demo accounts
that is never persisted, followed by the accounts created through sign-up,
which are stored under the ``users`` key. Lookups return the first match, so a
demo account always wins over a stored account with the same id.
"""

from __future__ import annotations

import logging

from jobboard.db.seed import demo_users
from jobboard.db.store import CURRENT_USER_KEY, USERS_KEY, Store
from jobboard.errors import AuthenticationError, DuplicateUserError, PermissionDeniedError, ValidationError
from jobboard.ids import new_id, utc_now_iso
from jobboard.types import ProfileUpdate, User

logger = logging.getLogger(__name__)

SIGNUP_ROLES = frozenset({"recruiter", "candidate"})


class UserDirectory:
    def __init__(self, store: Store, *, seed: list[User] | None = None):
        self.store = store
        self.seed = list(seed) if seed is not None else demo_users()

    def stored_users(self) -> list[User]:
        return self.store.read_collection(USERS_KEY, User)

    def all_users(self) -> list[User]:
        return [*self.seed, *self.stored_users()]

    def count(self) -> int:
        return len(self.all_users())

    def get(self, user_id: str) -> User | None:
        return next((user for user in self.all_users() if user.id == user_id), None)

    def find_by_email(self, email: str) -> User | None:
        needle = email.strip().casefold()
        return next((user for user in self.all_users() if user.email.casefold() == needle), None)

    def list_by_role(self, role: str) -> list[User]:
        return [user for user in self.all_users() if user.role == role]

    def is_seed_user(self, user_id: str) -> bool:
        return any(user.id == user_id for user in self.seed)

    def authenticate(self, email: str) -> User:
        user = self.find_by_email(email)
        if user is None:
            raise AuthenticationError("Invalid email or password")
        return user

    def sign_up(
        self,
        *,
        email: str,
        name: str,
        role: str,
        company: str | None = None,
        phone: str | None = None,
    ) -> User:
        missing = [field for field, value in (("email", email), ("name", name)) if not value.strip()]
        if missing:
            raise ValidationError(missing)
        if role not in SIGNUP_ROLES:
            raise ValidationError(["role"], f"role must be one of {sorted(SIGNUP_ROLES)}")

        with self.store.transaction():
            if self.find_by_email(email) is not None:
                raise DuplicateUserError(email)
            user = User(
                id=new_id(),
                email=email.strip(),
                name=name.strip(),
                role=role,
                company=company or None,
                phone=phone or None,
                created_at=utc_now_iso(),
            )
            users = self.stored_users()
            users.append(user)
            self.store.write_collection(USERS_KEY, users)

        logger.info("Registered user id=%s role=%s", user.id, user.role)
        return user

    def update_profile(self, user_id: str, update: ProfileUpdate) -> User | None:
        if self.is_seed_user(user_id):
            raise PermissionDeniedError("demo accounts cannot be edited")

        changes = update.model_dump(exclude_none=True)
        if "name" in changes and not changes["name"].strip():
            raise ValidationError(["name"])

        with self.store.transaction():
            users = self.stored_users()
            index = next((i for i, user in enumerate(users) if user.id == user_id), None)
            if index is None:
                return None
            updated = users[index].model_copy(update=changes)
            users[index] = updated
            self.store.write_collection(USERS_KEY, users)
        return updated


class SessionState:
    """The signed-in user of a local, single-user store."""

    def __init__(self, store: Store, directory: UserDirectory):
        self.store = store
        self.directory = directory

    def current_user(self) -> User | None:
        return self.store.read_value(CURRENT_USER_KEY, User)

    def sign_in(self, email: str) -> User:
        user = self.directory.authenticate(email)
        self.store.write_value(CURRENT_USER_KEY, user)
        return user

    def sign_out(self) -> None:
        self.store.delete(CURRENT_USER_KEY)

    def refresh(self, user: User) -> None:
        current = self.current_user()
        if current is not None and current.id == user.id:
            self.store.write_value(CURRENT_USER_KEY, user)
