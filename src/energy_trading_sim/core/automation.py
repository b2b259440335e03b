"""Threshold automation rules.

    auto_sell fires when price >= threshold and energy_balance > 0
    auto_buy  fires when price <= threshold and energy_balance < 0

A firing rule trades the full |energy_balance| at the current price.
Rules can be enabled and disabled but never removed.
"""

import itertools
import logging
from dataclasses import dataclass
from typing import Literal

logger = logging.getLogger(__name__)

RuleKind = Literal["auto_buy", "auto_sell"]

_TRADE_KIND = {"auto_buy": "buy", "auto_sell": "sell"}


@dataclass
class AutomationRule:
    """A standing instruction to trade when price crosses a threshold."""

    rule_id: int
    kind: RuleKind
    price_threshold: float
    enabled: bool = True

    def is_triggered(self, price: float, energy_balance: float) -> bool:
        if not self.enabled:
            return False
        if self.kind == "auto_sell":
            return price >= self.price_threshold and energy_balance > 0
        if self.kind == "auto_buy":
            return price <= self.price_threshold and energy_balance < 0
        return False


@dataclass(frozen=True)
class TradeIntent:
    """A trade an automation rule wants placed."""

    rule_id: int
    kind: Literal["buy", "sell"]
    amount: float
    price: float


class AutomationEngine:
    """Holds the player's rules and decides which ones fire."""

    def __init__(self) -> None:
        self.rules: list[AutomationRule] = []
        self._ids = itertools.count(1)

    def add_rule(
        self, kind: RuleKind, price_threshold: float, enabled: bool = True
    ) -> AutomationRule:
        if kind not in _TRADE_KIND:
            raise ValueError(f"Unknown rule kind: {kind!r}")
        rule = AutomationRule(
            rule_id=next(self._ids),
            kind=kind,
            price_threshold=price_threshold,
            enabled=enabled,
        )
        self.rules.append(rule)
        logger.info(f"Added rule {rule.rule_id}: {kind} @ ${price_threshold:.3f}")
        return rule

    def toggle_rule(self, rule_id: int, enabled: bool) -> AutomationRule | None:
        """Enable or disable a rule. Unknown ids are ignored (returns None)."""
        for rule in self.rules:
            if rule.rule_id == rule_id:
                rule.enabled = enabled
                return rule
        logger.warning(f"Toggle ignored: no automation rule with id {rule_id}")
        return None

    def next_intent(
        self, rule: AutomationRule, price: float, energy_balance: float
    ) -> TradeIntent | None:
        """Return the trade ``rule`` wants at this price and balance, if any.

        Evaluated rule by rule so that each rule sees the balance left by
        the trades placed before it.
        """
        if not rule.is_triggered(price, energy_balance):
            return None
        amount = abs(energy_balance)
        if amount <= 0:
            return None
        return TradeIntent(
            rule_id=rule.rule_id,
            kind=_TRADE_KIND[rule.kind],
            amount=amount,
            price=price,
        )
