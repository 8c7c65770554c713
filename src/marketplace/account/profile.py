"""Profile edits and admin account deletion."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from marketplace.account.user import User
from marketplace.auth.actor import Actor
from marketplace.auth.policy import Capability, require
from marketplace.domain import marketplace
from marketplace.exceptions import Conflict


@marketplace.command(part_of="User")
class UpdateProfile:
    user_id: Identifier(required=True)
    name: String(max_length=100)
    email: String(max_length=254)


@marketplace.command(part_of="User")
class DeleteUser:
    actor_id: Identifier(required=True)
    actor_role: String(required=True, max_length=20)
    user_id: Identifier(required=True)


@marketplace.command_handler(part_of=User)
class ProfileHandler:
    @handle(UpdateProfile)
    def update_profile(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)

        if command.email and command.email != user.email:
            if repo.find_by_email(command.email) is not None:
                raise Conflict("User with this email already exists")

        user.update_profile(name=command.name, email=command.email)
        repo.add(user)
        return user.summary()

    @handle(DeleteUser)
    def delete_user(self, command):
        require(Actor.from_command(command), Capability.MANAGE_USERS)

        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        repo._dao.delete(user)
