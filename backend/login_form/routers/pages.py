from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from ..core.config import get_settings
from ..core.rules import RuleSet
from ..models.rules import FieldRule
from ..services.markup import render_login_form
from ..services.validation import get_rule_set

router = APIRouter(tags=["pages"])


@router.get("/", response_class=HTMLResponse, summary="Login form")
async def index(rules: RuleSet = Depends(get_rule_set)) -> str:
    return render_login_form(rules, title=get_settings().app_title)


@router.get("/rules", response_model=list[FieldRule], summary="Active field rules")
async def list_rules(rules: RuleSet = Depends(get_rule_set)) -> list[FieldRule]:
    return list(rules.values())


@router.get("/health")
async def health() -> dict:
    return {"status": "ok"}
