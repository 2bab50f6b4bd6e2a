from urllib.parse import quote

from fastapi import APIRouter, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from ddroller.rendering import templates

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def index(request: Request) -> HTMLResponse:
    return templates.TemplateResponse(request, "index.html")


@router.post("/roll")
async def roll_form(notation: str = Form("")) -> RedirectResponse:
    notation = notation.strip()
    if not notation:
        return RedirectResponse(url="/", status_code=303)
    return RedirectResponse(url=f"/roll/{quote(notation, safe='')}", status_code=303)


@router.get("/rolls", response_class=HTMLResponse)
async def roll_list(request: Request) -> HTMLResponse:
    return templates.TemplateResponse(request, "roll_list.html")
