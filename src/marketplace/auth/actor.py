"""The authenticated caller of an operation."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Actor:
    user_id: str
    role: str
    email: str | None = None

    @classmethod
    def from_command(cls, command) -> "Actor":
        """Rebuild the caller from the ``actor_id``/``actor_role`` fields a command carries."""
        return cls(user_id=str(command.actor_id), role=command.actor_role)
