"""View Renderer — Jinja2 templates rendered into HTML responses.

Invariants:
    - Every template receives `request` and `title`
    - Templates are loaded from the package's templates/ directory
"""

from pathlib import Path
from typing import Any

from fastapi.templating import Jinja2Templates
from starlette.requests import Request
from starlette.responses import Response

from bookshelf.config import get_settings

PACKAGE_DIR = Path(__file__).resolve().parent.parent
TEMPLATES_DIR = PACKAGE_DIR / "templates"
STATIC_DIR = PACKAGE_DIR / "static"


class TemplateRenderer:
    """Renders a template name and data bag into an HTMLResponse."""

    def __init__(self, directory: Path = TEMPLATES_DIR, site_title: str = "Bookshelf"):
        self.templates = Jinja2Templates(directory=str(directory))
        self.templates.env.globals["site_title"] = site_title

    def render(
        self,
        request: Request,
        template_name: str,
        context: dict[str, Any] | None = None,
        status_code: int = 200,
    ) -> Response:
        data = {"title": None, **(context or {})}
        return self.templates.TemplateResponse(
            request, template_name, data, status_code=status_code,
        )


_renderer: TemplateRenderer | None = None


def get_renderer() -> TemplateRenderer:
    """FastAPI dependency; also used directly by the error handlers."""
    global _renderer
    if _renderer is None:
        _renderer = TemplateRenderer(site_title=get_settings().app_title)
    return _renderer
