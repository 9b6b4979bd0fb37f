# src/taskboard/app/routes.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class Route(StrEnum):
    LOGIN = "/"
    DASHBOARD = "/dashboard"


@dataclass(slots=True, frozen=True)
class RouteResolution:
    route: Route
    redirected: bool


def resolve_route(path: str, authenticated: bool) -> RouteResolution:
    """
    Route guard:
    - "/"           -> login, or dashboard when already logged in
    - "/dashboard"  -> dashboard, or login when logged out
    - anything else -> "/" (and from there as above)
    """
    normalized = "/" + (path or "").strip().strip("/")
    if normalized == Route.DASHBOARD.value:
        if authenticated:
            return RouteResolution(Route.DASHBOARD, redirected=False)
        return RouteResolution(Route.LOGIN, redirected=True)

    unknown = normalized != Route.LOGIN.value
    if authenticated:
        return RouteResolution(Route.DASHBOARD, redirected=True)
    return RouteResolution(Route.LOGIN, redirected=unknown)
