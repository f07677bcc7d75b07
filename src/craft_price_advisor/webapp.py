from __future__ import annotations

import logging
from pathlib import Path
from typing import get_args

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from starlette.datastructures import FormData, UploadFile
from starlette.templating import Jinja2Templates

from .advisor import PricingAdvisor
from .errors import ImageEncodingError
from .form_actions import (
    add_material,
    can_submit,
    edit_material,
    remove_material,
    set_item_image,
    update_field,
)
from .image_encoder import encode_image, has_image
from .models.advice import ImagePayload, PricingSuggestion
from .models.form import FormField, PricingForm
from .models.material import MaterialEntry, new_material_id
from .models.view import ViewState, ViewStatus

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"

REMOVE_PREFIX = "remove_material:"


class BaseCostResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    base_cost: float
    can_submit: bool


def format_currency(amount: float) -> str:
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def profit_class(profit: float) -> str:
    if profit > 0:
        return "profit-positive"
    if profit < 0:
        return "profit-negative"
    return "profit-even"


def image_from_post(data: FormData) -> ImagePayload | None:
    mime_type = str(data.get("item_image_mime", ""))
    encoded = str(data.get("item_image_data", ""))
    if not mime_type or not encoded:
        return None
    return ImagePayload(mime_type=mime_type, data=encoded)


def form_from_post(data: FormData) -> PricingForm:
    """Rebuild the form from a page post.

    Rows are created from the posted ids, then every typed value is replayed
    through the same reducers the page actions use. The photo carried from an
    earlier post comes back from the hidden ``item_image_*`` fields.
    """
    rows = list(zip(data.getlist("material_id"), data.getlist("material_name"), data.getlist("material_cost")))
    materials = tuple(MaterialEntry(id=str(material_id) or new_material_id()) for material_id, _, _ in rows)
    form = PricingForm(materials=materials or (MaterialEntry(),))

    for index, (_, name, cost) in enumerate(rows):
        form = edit_material(form, index, "name", str(name))
        form = edit_material(form, index, "cost", str(cost))
    for field in get_args(FormField):
        if field in data:
            form = update_field(form, field, str(data[field]))
    return set_item_image(form, image_from_post(data))


def create_app(advisor: PricingAdvisor, *, title: str = "Craft Price Advisor") -> FastAPI:
    app = FastAPI(title=title, version="0.1.0")
    templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
    templates.env.filters["currency"] = format_currency
    templates.env.filters["profit_class"] = profit_class

    def render(request: Request, form: PricingForm, view: ViewState) -> HTMLResponse:
        return templates.TemplateResponse(
            request,
            "index.html",
            {
                "form": form,
                "base_cost": form.base_cost,
                "can_submit": can_submit(form),
                "view": view,
                "ViewStatus": ViewStatus,
            },
        )

    @app.get("/", response_class=HTMLResponse)
    async def index(request: Request) -> HTMLResponse:
        return render(request, PricingForm(), ViewState())

    @app.post("/", response_class=HTMLResponse)
    async def handle_form(request: Request) -> HTMLResponse:
        data = await request.form()
        form = form_from_post(data)
        action = str(data.get("action", "recalculate"))
        view = ViewState()
        logger.debug("Handling form action", extra={"action": action})

        # A newly chosen photo replaces the carried one on every action.
        upload = data.get("item_image")
        if isinstance(upload, UploadFile) and has_image(upload):
            try:
                form = set_item_image(form, await encode_image(upload))
            except ImageEncodingError:
                logger.error("Failed to read uploaded photo", exc_info=True, extra={"action": action})
                return render(request, form, ViewState(status=ViewStatus.error, error=advisor.error_message))

        if action == "add_material":
            form = add_material(form)
        elif action.startswith(REMOVE_PREFIX):
            try:
                form = remove_material(form, int(action[len(REMOVE_PREFIX):]))
            except (ValueError, IndexError) as exc:
                raise HTTPException(status_code=400, detail="Invalid material row") from exc
        elif action == "clear_image":
            form = set_item_image(form, None)
        elif action == "submit":
            view = await advisor.submit(form)

        return render(request, form, view)

    @app.post("/v1/base-cost", response_model=BaseCostResponse)
    async def base_cost(form: PricingForm) -> BaseCostResponse:
        return BaseCostResponse(base_cost=form.base_cost, can_submit=can_submit(form))

    @app.post("/v1/pricing-advice", response_model=PricingSuggestion)
    async def pricing_advice(form: PricingForm) -> PricingSuggestion:
        if not can_submit(form):
            raise HTTPException(
                status_code=400,
                detail="Item name, description and a base cost above zero are required",
            )
        view = await advisor.submit(form)
        if view.status is not ViewStatus.success or view.result is None:
            raise HTTPException(status_code=502, detail=view.error)
        return view.result

    @app.get("/health")
    async def healthcheck() -> JSONResponse:
        return JSONResponse({"status": "ok"})

    return app


__all__ = ["create_app", "form_from_post", "image_from_post", "format_currency", "profit_class"]
