"""Navigation hooks: links to the consent administration page for host pages."""

from typing import Any, Dict, List

from fastapi import APIRouter, Request

router = APIRouter(prefix="/consentAdmin", tags=["consent-admin"])

LINK_TEXT = "Consent administration"


def hook_frontpage(links: Dict[str, List[Dict[str, str]]], href: str) -> None:
    """Add the consent administration link to the front page's config section."""
    if "links" not in links:
        raise KeyError("links")
    links.setdefault("config", []).append({"href": href, "text": LINK_TEXT})


def hook_configpage(page_data: Dict[str, Any], href: str) -> None:
    """Add the consent administration link to the configuration page."""
    page_data.setdefault("links", []).append({"href": href, "text": LINK_TEXT})


@router.get("/links")
def navigation_links(request: Request) -> Dict[str, Any]:
    """Links host pages embed to reach the consent administration page."""
    href = str(request.url_for("consent_admin"))
    page_data: Dict[str, Any] = {}
    hook_configpage(page_data, href)
    return page_data
