"""
Service for income distribution rules.

Rules are month-scoped snapshots. Reading a month with no rules falls back to
the most recent earlier month that has some, and the response says so.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy import and_, or_
from sqlalchemy.orm import Session, selectinload

from kaptal.exceptions import InvalidRequestError, NotFoundError
from kaptal.models.income_rule import IncomeRule, RuleItem
from kaptal.models.transaction import Transaction, TransactionType
from kaptal.services.deletion_policies import delete_rule_item, delete_rules_cascading
from kaptal.services.periods import HUNDRED, month_window, round2, usage_percentage

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
MAX_TOTAL_PERCENTAGE = Decimal("100")
DEFAULT_RULE_COLOR = "#6366f1"
DEFAULT_RULE_ICON = "💰"

DEFAULT_RULES = [
    {"name": "Metas", "percentage": Decimal("10"), "color": "#10b981", "icon": "🎯"},
    {"name": "Conforto", "percentage": Decimal("15"), "color": "#3b82f6", "icon": "🛋️"},
    {"name": "Prazeres", "percentage": Decimal("10"), "color": "#ec4899", "icon": "🎉"},
    {"name": "Custo Fixo", "percentage": Decimal("35"), "color": "#f59e0b", "icon": "🏠"},
    {"name": "Liberdade Financeira", "percentage": Decimal("25"), "color": "#8b5cf6", "icon": "💎"},
    {"name": "Conhecimento", "percentage": Decimal("5"), "color": "#14b8a6", "icon": "📚"},
]


@dataclass
class ResolvedRuleSet:
    """Rules actually shown for a requested month."""
    rules: List[IncomeRule]
    month: int
    year: int
    requested_month: int
    requested_year: int

    @property
    def used_fallback(self) -> bool:
        return bool(self.rules) and (self.month, self.year) != (self.requested_month, self.requested_year)


@dataclass
class SpendingTotals:
    by_rule: Dict[str, Decimal] = field(default_factory=dict)
    by_item: Dict[str, Decimal] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------

def get_rules_for_month(db: Session, user_id: str, month: int, year: int) -> List[IncomeRule]:
    return db.query(IncomeRule).options(
        selectinload(IncomeRule.items)
    ).filter(
        IncomeRule.user_id == user_id,
        IncomeRule.month == month,
        IncomeRule.year == year,
    ).order_by(IncomeRule.created_at).all()


def get_owned_rule(db: Session, user_id: str, rule_id: str) -> IncomeRule:
    rule = db.query(IncomeRule).filter(
        IncomeRule.id == rule_id,
        IncomeRule.user_id == user_id,
    ).first()
    if not rule:
        raise NotFoundError("Regra não encontrada")
    return rule


def get_owned_item(db: Session, user_id: str, rule_id: str, item_id: str) -> RuleItem:
    get_owned_rule(db, user_id, rule_id)
    item = db.query(RuleItem).filter(
        RuleItem.id == item_id,
        RuleItem.rule_id == rule_id,
    ).first()
    if not item:
        raise NotFoundError("Item não encontrado")
    return item


def resolve_rules(db: Session, user_id: str, month: int, year: int) -> ResolvedRuleSet:
    """
    Rules of the requested month, or of the latest earlier month with rules.
    No further fallback: an empty result means nothing earlier exists either.
    """
    rules = get_rules_for_month(db, user_id, month, year)
    if rules:
        return ResolvedRuleSet(rules, month, year, month, year)

    latest = db.query(IncomeRule.month, IncomeRule.year).filter(
        IncomeRule.user_id == user_id,
        or_(
            IncomeRule.year < year,
            and_(IncomeRule.year == year, IncomeRule.month < month),
        ),
    ).order_by(IncomeRule.year.desc(), IncomeRule.month.desc()).first()

    if latest is None:
        return ResolvedRuleSet([], month, year, month, year)

    fallback_month, fallback_year = latest
    logger.debug(
        "No rules for %02d/%d, falling back to %02d/%d",
        month, year, fallback_month, fallback_year,
    )
    rules = get_rules_for_month(db, user_id, fallback_month, fallback_year)
    return ResolvedRuleSet(rules, fallback_month, fallback_year, month, year)


def get_month_base_income(db: Session, user_id: str, month: int, year: int) -> Optional[Decimal]:
    """Base income shared by the month's rules, None if the month has no rules."""
    value = db.query(IncomeRule.base_income).filter(
        IncomeRule.user_id == user_id,
        IncomeRule.month == month,
        IncomeRule.year == year,
    ).order_by(IncomeRule.created_at).limit(1).scalar()
    return Decimal(value) if value is not None else None


def rule_budget_amount(rule: IncomeRule) -> Decimal:
    return round2(Decimal(rule.base_income) * Decimal(rule.percentage) / HUNDRED)


def attribute_spending(transactions: List[Transaction], item_parent: Dict[str, str]) -> SpendingTotals:
    """
    Accumulate expenses onto rules and items.

    A transaction tagged with a rule counts once for that rule. A transaction
    tagged with an item counts for the item, and is rolled up into the item's
    parent rule only when it carries no rule tag of its own, so a transaction
    tagged with both is never counted twice for the rule.
    """
    totals = SpendingTotals()
    for txn in transactions:
        amount = Decimal(txn.amount)

        if txn.income_rule_id:
            totals.by_rule[txn.income_rule_id] = totals.by_rule.get(txn.income_rule_id, ZERO) + amount

        if txn.rule_item_id:
            totals.by_item[txn.rule_item_id] = totals.by_item.get(txn.rule_item_id, ZERO) + amount
            parent_id = item_parent.get(txn.rule_item_id)
            if parent_id and not txn.income_rule_id:
                totals.by_rule[parent_id] = totals.by_rule.get(parent_id, ZERO) + amount

    return totals


def get_tagged_expenses(
    db: Session,
    user_id: str,
    month: int,
    year: int,
    rule_ids: List[str],
    item_ids: List[str],
) -> List[Transaction]:
    """Expenses of the month tagged with any of the given rules or items."""
    if not rule_ids and not item_ids:
        return []

    start, end = month_window(month, year)
    tag_filters = []
    if rule_ids:
        tag_filters.append(Transaction.income_rule_id.in_(rule_ids))
    if item_ids:
        tag_filters.append(Transaction.rule_item_id.in_(item_ids))

    return db.query(Transaction).filter(
        Transaction.user_id == user_id,
        Transaction.type == TransactionType.EXPENSE,
        Transaction.date >= start,
        Transaction.date <= end,
        or_(*tag_filters),
    ).order_by(Transaction.date.desc()).all()


def _spending_figures(budget: Decimal, spent: Decimal) -> Dict[str, Any]:
    return {
        "spent": spent,
        "remaining": budget - spent,
        "percentage_used": usage_percentage(spent, budget),
        "is_over_budget": spent > budget,
    }


def compute_income_rules(db: Session, user_id: str, month: int, year: int) -> Dict[str, Any]:
    """Rules of the month (or its fallback) with budget, spending and usage."""
    resolved = resolve_rules(db, user_id, month, year)
    rules = resolved.rules

    item_parent = {item.id: rule.id for rule in rules for item in rule.items}
    transactions = get_tagged_expenses(
        db, user_id, resolved.month, resolved.year,
        [rule.id for rule in rules], list(item_parent),
    )
    totals = attribute_spending(transactions, item_parent)

    rule_rows = []
    for rule in rules:
        budget = rule_budget_amount(rule)
        items = []
        for item in rule.items:
            item_budget = Decimal(item.amount)
            items.append({
                "id": item.id,
                "rule_id": rule.id,
                "name": item.name,
                "amount": item_budget,
                **_spending_figures(item_budget, totals.by_item.get(item.id, ZERO)),
            })

        rule_rows.append({
            "id": rule.id,
            "name": rule.name,
            "percentage": Decimal(rule.percentage),
            "color": rule.color,
            "icon": rule.icon,
            "month": rule.month,
            "year": rule.year,
            "base_income": Decimal(rule.base_income),
            "budget_amount": budget,
            **_spending_figures(budget, totals.by_rule.get(rule.id, ZERO)),
            "items": items,
        })

    return {
        "rules": rule_rows,
        "total_percentage": sum((Decimal(rule.percentage) for rule in rules), ZERO),
        "base_income": Decimal(rules[0].base_income) if rules else ZERO,
        "using_fallback": resolved.used_fallback,
        "month": resolved.month,
        "year": resolved.year,
        "requested_month": resolved.requested_month,
        "requested_year": resolved.requested_year,
    }


def get_rule_spending(db: Session, user_id: str, rule_id: str) -> Dict[str, Any]:
    """Spending detail of a single rule within its own month."""
    rule = get_owned_rule(db, user_id, rule_id)
    item_parent = {item.id: rule.id for item in rule.items}
    transactions = get_tagged_expenses(db, user_id, rule.month, rule.year, [rule.id], list(item_parent))
    totals = attribute_spending(transactions, item_parent)
    budget = rule_budget_amount(rule)

    return {
        "id": rule.id,
        "name": rule.name,
        "month": rule.month,
        "year": rule.year,
        "budget": budget,
        **_spending_figures(budget, totals.by_rule.get(rule.id, ZERO)),
        "transactions": transactions,
    }


def get_item_spending(db: Session, user_id: str, rule_id: str, item_id: str) -> Dict[str, Any]:
    """Spending detail of a single item within its rule's month."""
    item = get_owned_item(db, user_id, rule_id, item_id)
    rule = item.rule
    transactions = get_tagged_expenses(db, user_id, rule.month, rule.year, [], [item.id])
    spent = sum((Decimal(txn.amount) for txn in transactions), ZERO)
    budget = Decimal(item.amount)

    return {
        "id": item.id,
        "name": item.name,
        "month": rule.month,
        "year": rule.year,
        "budget": budget,
        **_spending_figures(budget, spent),
        "transactions": transactions,
    }


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------

def validate_percentage_headroom(
    db: Session,
    user_id: str,
    month: int,
    year: int,
    percentage: Decimal,
    exclude_rule_id: Optional[str] = None,
) -> None:
    """Reject a percentage that would push the month's total above 100%."""
    if percentage < 0 or percentage > MAX_TOTAL_PERCENTAGE:
        raise InvalidRequestError("Porcentagem deve ser entre 0 e 100")

    query = db.query(IncomeRule.percentage).filter(
        IncomeRule.user_id == user_id,
        IncomeRule.month == month,
        IncomeRule.year == year,
    )
    if exclude_rule_id:
        query = query.filter(IncomeRule.id != exclude_rule_id)

    other_total = sum((Decimal(value) for (value,) in query.all()), ZERO)
    if other_total + percentage > MAX_TOTAL_PERCENTAGE:
        available = round2(MAX_TOTAL_PERCENTAGE - other_total)
        logger.info(
            "Rejected rule percentage %s for %02d/%d, only %s%% available",
            percentage, month, year, available,
        )
        raise InvalidRequestError(f"Porcentagem total excederia 100%. Disponível: {available:.2f}%")


def set_month_base_income(db: Session, user_id: str, month: int, year: int, base_income: Decimal) -> int:
    """
    Write the base income on every rule of the month. Does not commit.
    Returns the number of rules updated.
    """
    return db.query(IncomeRule).filter(
        IncomeRule.user_id == user_id,
        IncomeRule.month == month,
        IncomeRule.year == year,
    ).update({IncomeRule.base_income: base_income}, synchronize_session="fetch")


def create_rule(db: Session, user_id: str, data: Dict[str, Any]) -> IncomeRule:
    month, year = data["month"], data["year"]
    percentage = Decimal(data["percentage"])
    validate_percentage_headroom(db, user_id, month, year, percentage)

    base_income = data.get("base_income")
    if base_income is None:
        base_income = get_month_base_income(db, user_id, month, year) or ZERO

    rule = IncomeRule(
        user_id=user_id,
        name=data["name"],
        percentage=percentage,
        color=data.get("color") or DEFAULT_RULE_COLOR,
        icon=data.get("icon") or DEFAULT_RULE_ICON,
        month=month,
        year=year,
        base_income=base_income,
    )
    db.add(rule)
    db.flush()
    set_month_base_income(db, user_id, month, year, base_income)
    db.commit()
    db.refresh(rule)
    return rule


def update_rule(db: Session, user_id: str, rule_id: str, changes: Dict[str, Any]) -> IncomeRule:
    """Apply only the fields present in `changes`; None never overwrites."""
    rule = get_owned_rule(db, user_id, rule_id)
    changes = {key: value for key, value in changes.items() if value is not None}

    if "percentage" in changes:
        validate_percentage_headroom(
            db, user_id, rule.month, rule.year,
            Decimal(changes["percentage"]), exclude_rule_id=rule.id,
        )

    base_income = changes.pop("base_income", None)
    for field_name, value in changes.items():
        setattr(rule, field_name, value)

    if base_income is not None:
        db.flush()
        set_month_base_income(db, user_id, rule.month, rule.year, base_income)

    db.commit()
    db.refresh(rule)
    return rule


def delete_rule(db: Session, user_id: str, rule_id: str) -> None:
    rule = get_owned_rule(db, user_id, rule_id)
    delete_rules_cascading(db, [rule])
    db.commit()


def add_item(db: Session, user_id: str, rule_id: str, data: Dict[str, Any]) -> RuleItem:
    get_owned_rule(db, user_id, rule_id)
    item = RuleItem(rule_id=rule_id, name=data["name"], amount=data["amount"])
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


def update_item(db: Session, user_id: str, rule_id: str, item_id: str, changes: Dict[str, Any]) -> RuleItem:
    item = get_owned_item(db, user_id, rule_id, item_id)
    for field_name, value in changes.items():
        if value is not None:
            setattr(item, field_name, value)
    db.commit()
    db.refresh(item)
    return item


def delete_item(db: Session, user_id: str, rule_id: str, item_id: str) -> None:
    item = get_owned_item(db, user_id, rule_id, item_id)
    delete_rule_item(db, item)
    db.commit()


def reset_to_defaults(
    db: Session,
    user_id: str,
    month: int,
    year: int,
    base_income: Optional[Decimal] = None,
) -> List[IncomeRule]:
    """Replace the month's rules with the six-bucket default template."""
    existing = get_rules_for_month(db, user_id, month, year)
    if base_income is None:
        base_income = Decimal(existing[0].base_income) if existing else ZERO

    try:
        delete_rules_cascading(db, existing)
        db.flush()
        for template in DEFAULT_RULES:
            db.add(IncomeRule(
                user_id=user_id,
                month=month,
                year=year,
                base_income=base_income,
                **template,
            ))
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("Reset %d rules to defaults for %02d/%d", len(existing), month, year)
    return get_rules_for_month(db, user_id, month, year)


def copy_from_month(
    db: Session,
    user_id: str,
    from_month: int,
    from_year: int,
    to_month: int,
    to_year: int,
    base_income: Optional[Decimal] = None,
) -> List[IncomeRule]:
    """Duplicate a month's rules and items into an empty target month."""
    if get_rules_for_month(db, user_id, to_month, to_year):
        raise InvalidRequestError(
            "O mês de destino já possui regras. Remova-as antes de copiar."
        )

    source = get_rules_for_month(db, user_id, from_month, from_year)
    if not source:
        raise NotFoundError("Nenhuma regra encontrada no mês de origem")

    try:
        for rule in source:
            copy = IncomeRule(
                user_id=user_id,
                name=rule.name,
                percentage=rule.percentage,
                color=rule.color,
                icon=rule.icon,
                month=to_month,
                year=to_year,
                base_income=base_income if base_income is not None else rule.base_income,
            )
            copy.items = [RuleItem(name=item.name, amount=item.amount) for item in rule.items]
            db.add(copy)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(
        "Copied %d rules from %02d/%d to %02d/%d",
        len(source), from_month, from_year, to_month, to_year,
    )
    return get_rules_for_month(db, user_id, to_month, to_year)
