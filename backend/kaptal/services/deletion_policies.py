"""
Named deletion policies, one per relationship.

- categories nullify: transactions lose their category, subcategories become
  top-level, budgets go away with the category.
- income rules cascade: their items are deleted with them; transactions keep
  existing but lose the rule and item tags.
- rule items nullify: transactions lose the item tag.
- savings goals cascade: their deposits are deleted with them.

None of these commit; callers own the transaction.
"""

from typing import List

from sqlalchemy.orm import Session

from kaptal.models.category import Category
from kaptal.models.income_rule import IncomeRule, RuleItem
from kaptal.models.savings_goal import SavingsGoal
from kaptal.models.transaction import Transaction


def delete_category_nullifying(db: Session, category: Category) -> None:
    db.query(Transaction).filter(
        Transaction.category_id == category.id
    ).update({Transaction.category_id: None}, synchronize_session=False)

    db.query(Category).filter(
        Category.parent_id == category.id
    ).update({Category.parent_id: None}, synchronize_session=False)

    db.delete(category)


def delete_rule_items_nullifying(db: Session, item_ids: List[str]) -> None:
    """Clear the item tag on transactions pointing at the given items."""
    if not item_ids:
        return
    db.query(Transaction).filter(
        Transaction.rule_item_id.in_(item_ids)
    ).update({Transaction.rule_item_id: None}, synchronize_session=False)


def delete_rule_item(db: Session, item: RuleItem) -> None:
    delete_rule_items_nullifying(db, [item.id])
    db.delete(item)


def delete_rules_cascading(db: Session, rules: List[IncomeRule]) -> None:
    """Delete rules with their items, detaching tagged transactions first."""
    if not rules:
        return

    rule_ids = [rule.id for rule in rules]
    delete_rule_items_nullifying(db, [item.id for rule in rules for item in rule.items])
    db.query(Transaction).filter(
        Transaction.income_rule_id.in_(rule_ids)
    ).update({Transaction.income_rule_id: None}, synchronize_session=False)

    for rule in rules:
        db.delete(rule)  # items go through the delete-orphan cascade


def delete_goal_cascading(db: Session, goal: SavingsGoal) -> None:
    db.delete(goal)  # deposits go through the delete-orphan cascade
