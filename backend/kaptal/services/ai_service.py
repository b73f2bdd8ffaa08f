import logging
from decimal import Decimal
from typing import Any, Dict

from sqlalchemy.orm import Session

from kaptal.ai.client import get_ai_client
from kaptal.ai.prompts import MONTHLY_SUMMARY_SYSTEM, MONTHLY_SUMMARY_USER
from kaptal.exceptions import ServiceUnavailableError, UpstreamError
from kaptal.services import income_rule_service, savings_service
from kaptal.services.stats_service import get_month_totals

logger = logging.getLogger(__name__)


def build_summary_prompt(db: Session, user_id: str, month: int, year: int, totals: Dict[str, Decimal]) -> str:
    rules = income_rule_service.compute_income_rules(db, user_id, month, year)
    if rules["rules"]:
        rules_text = "\n".join(
            f"- {r['name']} ({r['percentage']:.0f}%): gasto R$ {r['spent']:.2f} de R$ {r['budget_amount']:.2f}"
            + (" [ESTOUROU]" if r["is_over_budget"] else "")
            for r in rules["rules"]
        )
    else:
        rules_text = "Nenhuma regra definida."

    goals = savings_service.list_goals(db, user_id)
    if goals:
        goals_text = "\n".join(
            f"- {goal.name}: {progress['progress']:.1f}% (R$ {goal.current_amount:.2f} de R$ {goal.target_amount:.2f})"
            for goal, progress in goals
        )
    else:
        goals_text = "Nenhuma meta ativa."

    return MONTHLY_SUMMARY_USER.format(
        month=month,
        year=year,
        income=totals["income"],
        expenses=totals["expenses"],
        balance=totals["balance"],
        base_income=rules["base_income"],
        rules=rules_text,
        goals=goals_text,
    )


async def generate_monthly_summary(db: Session, user_id: str, month: int, year: int) -> Dict[str, Any]:
    client = get_ai_client()
    if not client.is_configured:
        raise ServiceUnavailableError("Serviço de IA não configurado")

    totals = get_month_totals(db, user_id, month, year)
    user_prompt = build_summary_prompt(db, user_id, month, year, totals)

    try:
        summary = await client.complete(
            system_prompt=MONTHLY_SUMMARY_SYSTEM,
            user_prompt=user_prompt,
        )
    except Exception as e:
        logger.error(f"Monthly summary failed for user {user_id}: {e}")
        raise UpstreamError("Não foi possível gerar o resumo agora") from e

    return {
        "month": month,
        "year": year,
        "totals": totals,
        "summary": (summary or "").strip(),
    }
