"""Seller onboarding — apply and approve.

An application only notifies the admin; nothing is persisted until the admin
approves it. Approval then either upgrades an existing shopper in place or,
when no account exists for the email, creates a verified seller with a
temporary password that is mailed to the applicant.
"""

import structlog
from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from marketplace.account.user import User
from marketplace.auth.actor import Actor
from marketplace.auth.passwords import generate_temporary_password, hash_password
from marketplace.auth.policy import Capability, Role, require
from marketplace.domain import marketplace
from marketplace.exceptions import Conflict
from marketplace.notification.dispatch import admin_email, notify
from marketplace.notification.types import NotificationType

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="User")
class ApplyAsSeller:
    email: String(required=True, max_length=254)
    store_name: String(required=True, max_length=100)
    store_description: Text()


@marketplace.command(part_of="User")
class ApproveSeller:
    actor_id: Identifier(required=True)
    actor_role: String(required=True, max_length=20)
    email: String(required=True, max_length=254)


@marketplace.command_handler(part_of=User)
class SellerOnboardingHandler:
    @handle(ApplyAsSeller)
    def apply_as_seller(self, command):
        existing = current_domain.repository_for(User).find_by_email(command.email)
        if existing is not None and existing.role == Role.SELLER.value:
            raise Conflict("User is already a seller")
        if existing is not None and existing.role == Role.ADMIN.value:
            raise Conflict("Admin accounts cannot apply as sellers")

        is_upgrade = existing is not None
        notify(
            NotificationType.SELLER_APPLICATION,
            admin_email(),
            {
                "email": command.email,
                "store_name": command.store_name,
                "store_description": command.store_description,
                "is_upgrade": is_upgrade,
            },
        )
        logger.info("Seller application submitted", email=command.email, upgrade=is_upgrade)

        return {
            "message": "Seller application submitted. An admin will review it shortly.",
            "type": "upgrade" if is_upgrade else "new_application",
        }

    @handle(ApproveSeller)
    def approve_seller(self, command):
        require(Actor.from_command(command), Capability.APPROVE_SELLERS)

        repo = current_domain.repository_for(User)
        user = repo.find_by_email(command.email)

        if user is not None:
            # Raises Conflict for sellers and admins
            user.promote_to_seller()
            repo.add(user)
            notify(NotificationType.SELLER_UPGRADE, user.email, {"name": user.name})
            logger.info("Shopper upgraded to seller", user_id=str(user.id))
            return {"message": "User upgraded to seller", "user_id": str(user.id), "type": "upgrade"}

        temporary_password = generate_temporary_password()
        user = User.create_seller(email=command.email, password_hash=hash_password(temporary_password))
        repo.add(user)
        notify(
            NotificationType.SELLER_APPROVAL,
            user.email,
            {"email": user.email, "temporary_password": temporary_password},
        )
        logger.info("Seller account created", user_id=str(user.id))
        return {"message": "Seller account created", "user_id": str(user.id), "type": "new_account"}
