"""Role enumeration, capability checks and the notification visibility rule."""

from __future__ import annotations

from enum import Enum

from app.core.config import Settings, settings

# Recipient sentinel meaning "visible to every role"
ALL_ROLES_RECIPIENT = "all"


class Role(str, Enum):
    ADMIN = "Admin"
    HOD = "HOD"
    EMPLOYEE = "Employee"
    QUALITY = "Quality"
    PDC = "PDC"

    @classmethod
    def parse(cls, value: str) -> Role:
        """Resolve a role name case-insensitively ("hod", "HOD", "Hod")."""
        normalized = value.strip().lower()
        for role in cls:
            if role.value.lower() == normalized:
                return role
        raise ValueError(f"Unknown role '{value}'")


class Capability(str, Enum):
    CREATE_TASK = "create_task"
    MANAGE_PARTS = "manage_parts"
    READ_NOTIFICATIONS = "read_notifications"


def parse_roles(raw: str) -> tuple[Role, ...]:
    """Parse a comma separated list of role names, preserving order."""
    roles: list[Role] = []
    for name in raw.split(","):
        if not name.strip():
            continue
        role = Role.parse(name)
        if role not in roles:
            roles.append(role)
    return tuple(roles)


class RolePolicy:
    """Role configuration resolved from settings.

    Holds the fan-out recipient set and the role allow-list behind each
    capability.
    """

    def __init__(
        self,
        notification_roles: tuple[Role, ...],
        capabilities: dict[Capability, frozenset[Role]],
    ):
        if not notification_roles:
            raise ValueError("At least one notification recipient role is required")
        self.notification_roles = notification_roles
        self.capabilities = capabilities

    @classmethod
    def from_settings(cls, config: Settings) -> RolePolicy:
        return cls(
            notification_roles=parse_roles(config.TASK_NOTIFICATION_ROLES),
            capabilities={
                Capability.CREATE_TASK: frozenset(parse_roles(config.TASK_CREATOR_ROLES)),
                Capability.MANAGE_PARTS: frozenset(parse_roles(config.PART_MANAGER_ROLES)),
                Capability.READ_NOTIFICATIONS: frozenset(
                    parse_roles(config.LEDGER_READER_ROLES)
                ),
            },
        )

    def has_capability(self, role: Role, capability: Capability) -> bool:
        return role in self.capabilities.get(capability, frozenset())


role_policy = RolePolicy.from_settings(settings)


def has_capability(role: Role, capability: Capability, policy: RolePolicy | None = None) -> bool:
    """Return True if ``role`` is allowed to exercise ``capability``."""
    return (policy or role_policy).has_capability(role, capability)

