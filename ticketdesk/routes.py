"""Route table and role gating.

Single source of truth for which page lives at which path, who may open it,
and which links the sidebar shows. Gating here is presentation only; the
backend enforces authorization on every call.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from ticketdesk.models import Role, User

LOGIN_PATH = "/login"
ROOT_PATH = "/"
DASHBOARD_PATH = "/dashboard"
MASTER_PATH = "/master"
MASTER_USERS_PATH = "/master/users"
MASTER_RECURRING_PATH = "/master/recurring-config"
MASTER_VENDORS_PATH = "/master/vendors"

ADMIN_ROLES: Tuple[Role, ...] = (Role.SUPER_ADMIN, Role.ASSET)


@dataclass(frozen=True)
class RouteSpec:
    """A navigable page and who may open it."""

    path: str
    title: str
    script: str
    icon: str
    allowed_roles: Tuple[Role, ...] = ()
    public: bool = False
    nav_group: Optional[str] = None
    in_nav: bool = True

    def allows(self, role: Optional[Role]) -> bool:
        if not self.allowed_roles:
            return True
        return role is not None and role in self.allowed_roles


def get_routes() -> List[RouteSpec]:
    return [
        RouteSpec(
            path=LOGIN_PATH,
            title="Login",
            script="pages/login.py",
            icon="🔐",
            public=True,
            in_nav=False,
        ),
        RouteSpec(
            path=DASHBOARD_PATH,
            title="Dashboard",
            script="pages/dashboard.py",
            icon="📊",
            allowed_roles=ADMIN_ROLES,
        ),
        RouteSpec(
            path=ROOT_PATH,
            title="Task Management",
            script="pages/tasks.py",
            icon="📋",
        ),
        RouteSpec(
            path=MASTER_PATH,
            title="Master Data",
            script="pages/master_redirect.py",
            icon="🗂️",
            allowed_roles=ADMIN_ROLES,
            in_nav=False,
        ),
        RouteSpec(
            path=MASTER_USERS_PATH,
            title="Users",
            script="pages/master_users.py",
            icon="👥",
            allowed_roles=(Role.SUPER_ADMIN,),
            nav_group="Master Data",
        ),
        RouteSpec(
            path=MASTER_RECURRING_PATH,
            title="Recurring Task",
            script="pages/master_recurring_config.py",
            icon="🔁",
            allowed_roles=ADMIN_ROLES,
            nav_group="Master Data",
        ),
        RouteSpec(
            path=MASTER_VENDORS_PATH,
            title="Vendors & Locations",
            script="pages/master_vendors.py",
            icon="🏢",
            allowed_roles=(Role.SUPER_ADMIN,),
            nav_group="Master Data",
        ),
    ]


def routes_by_path() -> Dict[str, RouteSpec]:
    return {r.path: r for r in get_routes()}


def normalize_path(path: Optional[str]) -> str:
    p = (path or "").strip()
    if not p:
        return ROOT_PATH
    if not p.startswith("/"):
        p = "/" + p
    if len(p) > 1:
        p = p.rstrip("/") or ROOT_PATH
    return p


@dataclass(frozen=True)
class RouteDecision:
    kind: str  # "loading" | "render" | "redirect"
    path: str
    target: Optional[str] = None

    @property
    def should_render(self) -> bool:
        return self.kind == "render"


def resolve_route(path: Optional[str], user: Optional[User], loading: bool = False) -> RouteDecision:
    """Decide whether ``path`` renders, redirects, or waits for the session."""
    p = normalize_path(path)
    route = routes_by_path().get(p)
    if route is None:
        return RouteDecision("redirect", p, ROOT_PATH)
    if loading:
        return RouteDecision("loading", p)
    if route.public:
        if user is not None:
            return RouteDecision("redirect", p, ROOT_PATH)
        return RouteDecision("render", p)
    if user is None:
        return RouteDecision("redirect", p, LOGIN_PATH)
    if not route.allows(user.role):
        return RouteDecision("redirect", p, ROOT_PATH)
    return RouteDecision("render", p)


def master_landing_path(user: Optional[User]) -> str:
    if user is not None and user.role == Role.ASSET:
        return MASTER_RECURRING_PATH
    return MASTER_USERS_PATH


def visible_routes(user: Optional[User]) -> List[RouteSpec]:
    """Routes the sidebar should link for ``user``, in display order."""
    if user is None:
        return []
    return [r for r in get_routes() if r.in_nav and not r.public and r.allows(user.role)]


def nav_groups(user: Optional[User]) -> Dict[Optional[str], List[RouteSpec]]:
    grouped: Dict[Optional[str], List[RouteSpec]] = {}
    for r in visible_routes(user):
        grouped.setdefault(r.nav_group, []).append(r)
    return grouped


# ---------------- Action gating ----------------

def _role(user: Optional[User]) -> Optional[Role]:
    return user.role if user is not None else None


def can_create_task(user: Optional[User]) -> bool:
    return _role(user) in (Role.SUPER_ADMIN, Role.ASSET)


def can_update_status(user: Optional[User]) -> bool:
    return _role(user) in (Role.SUPER_ADMIN, Role.VENDOR)


def can_delete_task(user: Optional[User]) -> bool:
    return _role(user) == Role.SUPER_ADMIN


def can_export_tasks(user: Optional[User]) -> bool:
    return _role(user) in (Role.SUPER_ADMIN, Role.ASSET)


def can_edit_recurring_configs(user: Optional[User]) -> bool:
    """ASSET users see recurring configs read-only."""
    return _role(user) == Role.SUPER_ADMIN
