"""User aggregate root — shoppers, sellers and admins."""

from datetime import datetime
from uuid import uuid4

from protean.fields import Boolean, DateTime, String

from marketplace.account.events import (
    EmailVerified,
    ProfileUpdated,
    SellerAccountCreated,
    UserPromotedToSeller,
    UserRegistered,
)
from marketplace.auth.policy import Role
from marketplace.domain import marketplace
from marketplace.exceptions import Conflict
from marketplace.utils.query import fetch_all


@marketplace.aggregate
class User:
    """A marketplace account.

    Accounts created through registration start unverified and carry a
    one-time ``verification_token``; logging in requires ``is_verified``.
    Seller accounts created by an admin are verified from the start.
    """

    email: String(required=True, max_length=254, unique=True)
    password_hash: String(required=True, max_length=255)
    name: String(required=True, max_length=100)
    role: String(max_length=20, choices=Role, default=Role.SHOPPER.value)
    is_verified: Boolean(default=False)
    verification_token: String(max_length=64)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @classmethod
    def register(cls, email, password_hash, name, role=Role.SHOPPER.value):
        now = datetime.now()
        user = cls(
            email=email,
            password_hash=password_hash,
            name=name,
            role=role,
            is_verified=False,
            verification_token=str(uuid4()),
            created_at=now,
            updated_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=user.id,
                email=email,
                name=name,
                role=role,
                registered_at=now,
            )
        )
        return user

    @classmethod
    def create_seller(cls, email, password_hash, name="Seller"):
        now = datetime.now()
        user = cls(
            email=email,
            password_hash=password_hash,
            name=name,
            role=Role.SELLER.value,
            is_verified=True,
            created_at=now,
            updated_at=now,
        )
        user.raise_(SellerAccountCreated(user_id=user.id, email=email, created_at=now))
        return user

    @classmethod
    def create_admin(cls, email, password_hash, name="Admin"):
        now = datetime.now()
        return cls(
            email=email,
            password_hash=password_hash,
            name=name,
            role=Role.ADMIN.value,
            is_verified=True,
            created_at=now,
            updated_at=now,
        )

    def verify_email(self):
        now = datetime.now()
        self.is_verified = True
        self.verification_token = None
        self.updated_at = now
        self.raise_(EmailVerified(user_id=self.id, email=self.email, verified_at=now))

    def promote_to_seller(self):
        if self.role != Role.SHOPPER.value:
            raise Conflict(f"User is already a {self.role}")

        now = datetime.now()
        self.role = Role.SELLER.value
        self.updated_at = now
        self.raise_(UserPromotedToSeller(user_id=self.id, email=self.email, promoted_at=now))

    def update_profile(self, name=None, email=None):
        if name is not None:
            self.name = name
        if email is not None:
            self.email = email
        self.updated_at = datetime.now()
        self.raise_(ProfileUpdated(user_id=self.id, name=self.name, email=self.email))

    def summary(self) -> dict:
        return {"id": str(self.id), "email": self.email, "name": self.name, "role": self.role}


@marketplace.repository(part_of=User)
class UserRepository:
    def find_by_email(self, email: str) -> User | None:
        users = self._dao.query.filter(email=email).all().items
        return users[0] if users else None

    def find_by_verification_token(self, token: str) -> User | None:
        users = self._dao.query.filter(verification_token=token).all().items
        return users[0] if users else None

    def list_all(self) -> list[User]:
        return fetch_all(self._dao.query.order_by("-created_at"))
