# backend/login_form/routers/auth.py
#
# Login route:
#   • POST /login – x-www-form-urlencoded `email` + `password` → text/plain
#
# Every outcome (incomplete form, invalid field, passed) is a 200 with a
# plain-text message; the checks themselves live in
# backend/login_form/services/validation.py.

from fastapi import APIRouter, Depends, Form
from fastapi.responses import PlainTextResponse

from ..services.validation import FormValidator, get_validator

router = APIRouter(tags=["auth"])


# ────────────────────────────── login ────────────────────────────────
@router.post(
    "/login",
    response_class=PlainTextResponse,
    summary="Formal validation of the login form (x-www-form-urlencoded)",
)
async def login(
    email: str = Form(""),
    password: str = Form(""),
    validator: FormValidator = Depends(get_validator),
) -> str:
    """
    Expects `application/x-www-form-urlencoded` with `email` and
    `password` fields (what the <form> on `/` sends). Missing fields are
    treated as empty.

    No credentials are checked: the best answer is a placeholder saying
    the values passed the formal validation.
    """
    return validator.authenticate(email, password).message
