"""Registration and email verification — commands and handlers."""

import structlog
from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from marketplace.account.user import User
from marketplace.auth.passwords import hash_password
from marketplace.auth.policy import Role
from marketplace.domain import marketplace
from marketplace.exceptions import Conflict, Forbidden, NotFound
from marketplace.notification.dispatch import notify
from marketplace.notification.types import NotificationType

logger = structlog.get_logger(__name__)

_SELF_SERVICE_ROLES = (Role.SHOPPER.value, Role.SELLER.value)


@marketplace.command(part_of="User")
class RegisterUser:
    email: String(required=True, max_length=254)
    password: String(required=True, min_length=6, max_length=128)
    name: String(required=True, max_length=100)
    role: String(max_length=20, default=Role.SHOPPER.value)


@marketplace.command(part_of="User")
class VerifyEmail:
    token: String(required=True, max_length=64)


@marketplace.command_handler(part_of=User)
class RegistrationHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        role = command.role or Role.SHOPPER.value
        if role not in _SELF_SERVICE_ROLES:
            raise Forbidden("Admin accounts cannot be self-registered")

        repo = current_domain.repository_for(User)
        if repo.find_by_email(command.email) is not None:
            raise Conflict("User with this email already exists")

        user = User.register(
            email=command.email,
            password_hash=hash_password(command.password),
            name=command.name,
            role=role,
        )
        repo.add(user)

        notify(
            NotificationType.EMAIL_VERIFICATION,
            user.email,
            {"name": user.name, "token": user.verification_token},
        )
        logger.info("User registered", user_id=str(user.id), role=role)

        return {
            "message": "Registration successful. Please check your email to verify your account.",
            "user_id": str(user.id),
        }

    @handle(VerifyEmail)
    def verify_email(self, command):
        repo = current_domain.repository_for(User)
        user = repo.find_by_verification_token(command.token)
        if user is None:
            raise NotFound("Invalid verification token")

        user.verify_email()
        repo.add(user)
        logger.info("Email verified", user_id=str(user.id))

        return {"message": "Email verified successfully"}
