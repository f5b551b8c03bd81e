"""
Storefront Routes - Server-side rendered shop pages.

Serves minimal HTML for every storefront path. The footer is assembled by
the render lifecycle handlers, which add the coming soon banner for store
managers while the store is not launched.

Key behaviors:
- Store pages are matched by path (shop, cart, checkout, account, products)
- Paths under `/api` that no API route handled answer 404
- ``?site-preview`` renders the page as visitors would see it (no banner)
"""

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse

from src.api.deps import get_lifecycle_hooks, get_optional_user, get_policy
from src.domain.entities import User
from src.domain.policy import StorefrontPolicy
from src.shell.hooks.lifecycle_hooks import LifecycleHooks, RenderContext

router = APIRouter()

API_PREFIX = "api"


def _escape_html(text: str) -> str:
    """Escape HTML special characters."""
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#x27;")
    )


def render_storefront_page(title: str, body_content: str = "", footer: str = "") -> str:
    """Render a complete storefront HTML page."""
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1.0" />
    <title>{_escape_html(title)}</title>
</head>
<body>
    {body_content}
    <footer>
    {footer}
    </footer>
</body>
</html>"""


@router.get(
    "/{path:path}",
    response_class=HTMLResponse,
    summary="Storefront page",
)
def storefront_page(
    path: str,
    request: Request,
    user: User | None = Depends(get_optional_user),
    policy: StorefrontPolicy = Depends(get_policy),
    hooks: LifecycleHooks = Depends(get_lifecycle_hooks),
) -> HTMLResponse:
    """Serve a storefront page with footer fragments from render handlers."""
    # Unmatched API paths are not storefront pages
    if path == API_PREFIX or path.startswith(API_PREFIX + "/"):
        raise HTTPException(status_code=404, detail="Not Found")

    page_path = "/" + path
    footer = hooks.render_footer(
        RenderContext(
            user=user,
            path=page_path,
            is_preview_mode=policy.is_preview(request.query_params),
        )
    )

    body = f"""
    <main>
        <h1>{_escape_html(page_path)}</h1>
    </main>
    """
    return HTMLResponse(content=render_storefront_page(page_path, body, footer), status_code=200)
