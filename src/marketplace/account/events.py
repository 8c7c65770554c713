"""Domain events for the User aggregate."""

from protean.fields import DateTime, Identifier, String

from marketplace.domain import marketplace


@marketplace.event(part_of="User")
class UserRegistered:
    """A visitor created an account; it stays unverified until the emailed token is used."""

    __version__ = 1

    user_id = Identifier(required=True)
    email = String(required=True)
    name = String(required=True)
    role = String(required=True)
    registered_at = DateTime(required=True)


@marketplace.event(part_of="User")
class EmailVerified:
    __version__ = 1

    user_id = Identifier(required=True)
    email = String(required=True)
    verified_at = DateTime(required=True)


@marketplace.event(part_of="User")
class SellerAccountCreated:
    """An admin approved a seller application for an email with no account."""

    __version__ = 1

    user_id = Identifier(required=True)
    email = String(required=True)
    created_at = DateTime(required=True)


@marketplace.event(part_of="User")
class UserPromotedToSeller:
    __version__ = 1

    user_id = Identifier(required=True)
    email = String(required=True)
    promoted_at = DateTime(required=True)


@marketplace.event(part_of="User")
class ProfileUpdated:
    __version__ = 1

    user_id = Identifier(required=True)
    name = String()
    email = String()
