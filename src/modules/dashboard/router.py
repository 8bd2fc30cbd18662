"""Dashboard entry route."""

from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse

from src.core.config import settings
from src.core.deps import get_optional_user
from src.modules.dashboard.schemas import DashboardKind, DashboardView
from src.modules.dashboard.service import DashboardState, resolve_dashboard
from src.modules.users.models import User

router = APIRouter(prefix="/api/v1/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardView)
async def dashboard(current_user: User | None = Depends(get_optional_user)):
    state = DashboardState(
        is_loading=False,
        identity=current_user.user_id if current_user else None,
        role=current_user.role if current_user else None,
    )
    view = resolve_dashboard(state, settings.sign_in_path)
    if view.kind == DashboardKind.UNAUTHENTICATED:
        return RedirectResponse(view.redirect_to, status_code=status.HTTP_307_TEMPORARY_REDIRECT)
    return view
