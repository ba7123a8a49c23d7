import enum


class PermLevel(enum.IntEnum):
    """Ordered privilege tiers used to gate commands and protect targets."""

    EVERYONE = 0
    MODERATOR = 1
    ADMIN = 2
    OWNER = 3

    def is_at_least(self, other: "PermLevel") -> bool:
        return self >= other

    def __str__(self) -> str:
        return self.name.title()
