from pathlib import Path
from fastapi import Request
from fastapi.templating import Jinja2Templates

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def render(request: Request, view: str, data: dict = None, status_code: int = 200):
    return templates.TemplateResponse(request, view, data or {}, status_code=status_code)
