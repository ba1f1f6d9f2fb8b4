# dashboard/core/rbac.py
"""
Role based access control for the dashboard screens.

Two independent questions are answered here:

* access: may the current role open a screen (and edit/delete inside it)?
  Default is deny: a role without a table entry opens nothing.
* visibility: should a navigation entry be rendered at all?
  Default is show: only components listed in the restricted table are hidden.

The role comes from the `userName` claim of the access token, which is
decoded without signature verification. These decisions only shape the
client; the API must re-check the role on every request.
"""
import logging
from enum import Enum
from types import MappingProxyType
from typing import Callable, Iterable, List, Mapping, NamedTuple, Optional, Union

from .catalog import SECTIONS, Component, Section
from .config import ACCESS_TOKEN_COOKIE, USER_ROLE_COOKIE
from .models import FULL_ACCESS, NO_ACCESS, RolePermissions
from .session import load_cookie
from .tokens import decode_token

logger = logging.getLogger(__name__)

ADMIN_ROLE = "admin"

VALID_ROLES = [
    ADMIN_ROLE,
    "factory1",
    "factory2",
    "factory3",
    "factory4",
    "factory5",
]

CookieReader = Callable[[str], Optional[str]]
ComponentName = Union[Component, str]


class RoleKind(Enum):
    ADMIN = "admin"
    NAMED = "named"
    UNKNOWN = "unknown"


class ComponentState(Enum):
    HIDDEN = "hidden"
    VISIBLE_LOCKED = "visible-locked"
    VISIBLE_UNLOCKED = "visible-unlocked"


class DriftEntry(NamedTuple):
    role: str
    component: Component
    state: ComponentState
    can_access: bool


def _component_set(table: str, role: str, names: Iterable[ComponentName]) -> frozenset:
    if role == ADMIN_ROLE:
        raise ValueError(f"{table} table must not list '{ADMIN_ROLE}': admin access is implicit")

    components = set()
    for name in names:
        component = Component.lookup(name)
        if component is None:
            raise ValueError(f"{table} table lists unknown component {name!r} for role '{role}'")
        components.add(component)
    return frozenset(components)


class AccessPolicy:
    """
    Immutable pair of role tables. Build once and pass it around.
    """

    def __init__(
        self,
        access: Mapping[str, Iterable[ComponentName]],
        restricted: Mapping[str, Iterable[ComponentName]],
    ):
        self._access = MappingProxyType(
            {role: _component_set("access", role, names) for role, names in access.items()}
        )
        self._restricted = MappingProxyType(
            {role: _component_set("restricted", role, names) for role, names in restricted.items()}
        )

    @property
    def access(self) -> Mapping[str, frozenset]:
        return self._access

    @property
    def restricted(self) -> Mapping[str, frozenset]:
        return self._restricted

    def classify(self, role: str) -> RoleKind:
        if role == ADMIN_ROLE:
            return RoleKind.ADMIN
        if role in self._access:
            return RoleKind.NAMED
        return RoleKind.UNKNOWN

    def allowed_components(self, role: str) -> frozenset:
        return self._access.get(role, frozenset())

    def restricted_components(self, role: str) -> frozenset:
        if role == ADMIN_ROLE:
            return frozenset()
        return self._restricted.get(role, frozenset())

    def drift(self, sections: Iterable[Section] = SECTIONS) -> List[DriftEntry]:
        """
        Lists the places where the two tables disagree for a role: a
        sub-section shown in a section the role can open but locked, or a
        sub-section hidden although the role may open it.
        """
        entries = []
        for role in sorted(set(self._access) | set(self._restricted)):
            for section in sections:
                if not resolve_permissions(role, section.component, policy=self).can_access:
                    continue
                for sub in section.subsections:
                    state = component_state(role, sub.component, policy=self)
                    can_access = resolve_permissions(role, sub.component, policy=self).can_access
                    if state is ComponentState.VISIBLE_LOCKED or (
                        state is ComponentState.HIDDEN and can_access
                    ):
                        entries.append(DriftEntry(role, sub.component, state, can_access))
        return entries


DEFAULT_POLICY = AccessPolicy(
    access={
        "factory1": [
            Component.BALLINA,
            Component.BALLINA_WORKERS,
            Component.BALLINA_TRADERS,
            Component.BALLINA_SALES,
        ],
        "factory2": [
            Component.GIRGA,
            Component.GIRGA_TRADERS,
            Component.GIRGA_WORKERS,
            Component.GIRGA_SALES,
        ],
        "factory3": [
            Component.DALAA,
            Component.DALAA_WORKERS,
            Component.DALAA_TRADERS,
            Component.DALAA_SALES,
        ],
        "factory4": [
            Component.SIMA,
            Component.SIMA_WORKERS,
            Component.SIMA_SALES,
            Component.SIMA_TRADERS,
        ],
        "factory5": [
            Component.GAZA,
            Component.GAZA_SALES,
            Component.GAZA_TRADERS,
            Component.GAZA_WORKERS,
        ],
    },
    restricted={
        "factory1": [Component.BALLINA_SHOWROOM],
        "factory2": [Component.GIRGA_MALL],
        "factory3": [Component.DALAA_CENTER],
        "factory4": [Component.SIMA_CENTER],
        "factory5": [Component.GAZA_CENTER],
    },
)


def resolve_permissions(
    role: str,
    component: Optional[ComponentName] = None,
    policy: AccessPolicy = DEFAULT_POLICY,
) -> RolePermissions:
    """
    Permission decision for an already known role.

    Admin gets everything, for any component (or none). Every other role
    can at most open the components listed for it; editing and deleting
    are admin only.
    """
    kind = policy.classify(role)
    if kind is RoleKind.ADMIN:
        return FULL_ACCESS
    if kind is RoleKind.UNKNOWN or component is None:
        return NO_ACCESS

    target = Component.lookup(component)
    can_access = target is not None and target in policy.allowed_components(role)
    return RolePermissions(can_access=can_access, can_edit=False, can_delete=False)


def is_visible(role: str, component: ComponentName, policy: AccessPolicy = DEFAULT_POLICY) -> bool:
    if policy.classify(role) is RoleKind.ADMIN:
        return True
    target = Component.lookup(component)
    if target is None:
        return True
    return target not in policy.restricted_components(role)


def component_state(
    role: str,
    component: ComponentName,
    policy: AccessPolicy = DEFAULT_POLICY,
) -> ComponentState:
    if not is_visible(role, component, policy):
        return ComponentState.HIDDEN
    if resolve_permissions(role, component, policy).can_access:
        return ComponentState.VISIBLE_UNLOCKED
    return ComponentState.VISIBLE_LOCKED


def get_user_role(reader: Optional[CookieReader] = None) -> str:
    """
    Role of the signed-in user, read fresh from the cookie store.

    Uses the token's `userName` claim ("factory1", "admin", ...). When the
    token carries no usable `userName`, falls back to the legacy plain
    `userRole` cookie. No token at all means no role.
    """
    if reader is None:
        reader = load_cookie

    token = reader(ACCESS_TOKEN_COOKIE)
    if not token:
        return ""

    decoded = decode_token(token)
    if decoded:
        user_name = decoded.get("userName")
        if isinstance(user_name, str) and user_name:
            return user_name

    # Fallback to the old cookie if token doesn't have userName
    return reader(USER_ROLE_COOKIE) or ""


def get_role_permissions(
    component: Optional[ComponentName] = None,
    *,
    reader: Optional[CookieReader] = None,
    policy: AccessPolicy = DEFAULT_POLICY,
) -> RolePermissions:
    role = get_user_role(reader)
    permissions = resolve_permissions(role, component, policy)
    logger.debug("Permissions for role=%r component=%r: %s", role, component, permissions)
    return permissions


def has_edit_delete_permission(reader: Optional[CookieReader] = None) -> bool:
    return get_user_role(reader) == ADMIN_ROLE


def get_restricted_components(
    *,
    reader: Optional[CookieReader] = None,
    policy: AccessPolicy = DEFAULT_POLICY,
) -> frozenset:
    return policy.restricted_components(get_user_role(reader))


def should_show_component(
    component: ComponentName,
    *,
    reader: Optional[CookieReader] = None,
    policy: AccessPolicy = DEFAULT_POLICY,
) -> bool:
    return is_visible(get_user_role(reader), component, policy)
