from fastapi import APIRouter, Depends

from jsstyle.api.dependencies import get_registry
from jsstyle.core.registry import RuleRegistry
from jsstyle.models import RuleInfo

router = APIRouter(tags=["rules"])


@router.get("/rules", response_model=list[RuleInfo])
async def list_rules(registry: RuleRegistry = Depends(get_registry)) -> list[RuleInfo]:
    return [registered.info() for registered in registry.rules()]
