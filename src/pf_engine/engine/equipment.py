"""Equipment statistics.

Armor class composition, carried weight, encumbrance and weapon damage
from a character's items. Only equipped armor and shields count toward
armor class; every carried item counts toward weight.

Encumbrance thresholds scale with the strength score:

- Light load: strength x 10 lb.
- Medium load: strength x 20 lb.
- Heavy load: strength x 30 lb.

Anything over the medium load is heavily encumbered; there is no tier
above that.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

import d20
from d20 import diceast
from pydantic import BaseModel, ConfigDict

from pf_engine.core.constants import (
    BASE_ARMOR_CLASS,
    HEAVY_LOAD_ARMOR_CHECK_PENALTY,
    HEAVY_LOAD_MOVEMENT_REDUCTION,
)
from pf_engine.core.exceptions import ValidationError
from pf_engine.core.logging import get_logger
from pf_engine.models.character import EquippedItem
from pf_engine.models.components import AbilityScoreBlock
from pf_engine.models.enums import Ability, EncumbranceTier, ItemCategory


logger = get_logger(__name__)

MAX_EQUIPPED_ARMOR = 1
MAX_EQUIPPED_SHIELDS = 2


class ArmorClassBreakdown(BaseModel):
    """How an armor class total is composed.

    Attributes:
        base: Always 10.
        armor_bonus: Sum of equipped armor bonuses.
        shield_bonus: Sum of equipped shield bonuses.
        dex_bonus: Dexterity modifier after any armor cap.
        max_dex_bonus: Lowest cap among equipped armor, or None.
        armor_check_penalty: Sum of equipped armor and shield penalties.
        total: base + armor + shield + dex bonus.
        touch: base + dex bonus.
        flat_footed: total without a positive dex bonus.
    """

    model_config = ConfigDict(frozen=True)

    base: int = BASE_ARMOR_CLASS
    armor_bonus: int
    shield_bonus: int
    dex_bonus: int
    max_dex_bonus: int | None
    armor_check_penalty: int
    total: int
    touch: int
    flat_footed: int


class EncumbranceLimits(BaseModel):
    """Load thresholds in pounds for a strength score."""

    model_config = ConfigDict(frozen=True)

    light: int
    medium: int
    heavy: int


class EncumbrancePenalties(BaseModel):
    """Penalties from an encumbrance tier."""

    model_config = ConfigDict(frozen=True)

    armor_check_penalty: int = 0
    movement_reduction: int = 0


class LoadStatus(BaseModel):
    """Carried weight measured against strength."""

    model_config = ConfigDict(frozen=True)

    total_weight: float
    limits: EncumbranceLimits
    tier: EncumbranceTier
    penalties: EncumbrancePenalties
    percent_of_heavy: int


class WeaponDamage(BaseModel):
    """Damage of a weapon with the wielder's strength applied."""

    model_config = ConfigDict(frozen=True)

    base_damage: str
    total_damage: str
    dice_count: int
    dice_size: int
    modifier: int
    minimum: int
    maximum: int
    average: float


class EquipmentSummary(BaseModel):
    """Everything derived from a character's items."""

    model_config = ConfigDict(frozen=True)

    total_weight: float
    encumbrance: EncumbranceTier
    penalties: EncumbrancePenalties
    armor_class: ArmorClassBreakdown
    items: tuple[EquippedItem, ...]


# =============================================================================
# Armor Class
# =============================================================================


def calculate_ac(items: Iterable[EquippedItem], dex_modifier: int) -> ArmorClassBreakdown:
    """Compose armor class from equipped armor, shields and dexterity.

    The dexterity bonus is capped by the lowest max-dex value among
    equipped armor that declares one. Unequipped items and items of other
    categories are ignored.

    Example:
        Armor +5 with max dex 1 and a dexterity modifier of +5 gives
        10 + 5 + 1 = 16.
    """
    armor_bonus = 0
    shield_bonus = 0
    armor_check_penalty = 0
    max_dex_bonus: int | None = None

    for item in items:
        if not item.equipped:
            continue
        if item.category == ItemCategory.ARMOR:
            armor_bonus += item.armor_bonus
            armor_check_penalty += item.armor_check_penalty
            if item.max_dex_bonus is not None:
                max_dex_bonus = (
                    item.max_dex_bonus
                    if max_dex_bonus is None
                    else min(max_dex_bonus, item.max_dex_bonus)
                )
        elif item.category == ItemCategory.SHIELD:
            shield_bonus += item.armor_bonus
            armor_check_penalty += item.armor_check_penalty

    dex_bonus = dex_modifier if max_dex_bonus is None else min(dex_modifier, max_dex_bonus)
    total = BASE_ARMOR_CLASS + armor_bonus + shield_bonus + dex_bonus
    return ArmorClassBreakdown(
        armor_bonus=armor_bonus,
        shield_bonus=shield_bonus,
        dex_bonus=dex_bonus,
        max_dex_bonus=max_dex_bonus,
        armor_check_penalty=armor_check_penalty,
        total=total,
        touch=BASE_ARMOR_CLASS + dex_bonus,
        flat_footed=total - max(0, dex_bonus),
    )


def validate_equipment(items: Iterable[EquippedItem]) -> None:
    """Check that the equipped set is wearable.

    Raises:
        ValidationError: If more than one armor or more than two shields
            are equipped.
    """
    equipped = [item for item in items if item.equipped]
    armor = [item.item_id for item in equipped if item.category == ItemCategory.ARMOR]
    if len(armor) > MAX_EQUIPPED_ARMOR:
        raise ValidationError(
            "Cannot equip multiple armor pieces",
            field_name="equipment",
            invalid_value=armor,
        )
    shields = [item.item_id for item in equipped if item.category == ItemCategory.SHIELD]
    if len(shields) > MAX_EQUIPPED_SHIELDS:
        raise ValidationError(
            "Cannot equip more than 2 shields (one in each hand)",
            field_name="equipment",
            invalid_value=shields,
        )


# =============================================================================
# Weight and Encumbrance
# =============================================================================


def calculate_total_weight(items: Iterable[EquippedItem]) -> float:
    """Total weight of all carried items, equipped or not."""
    return sum((item.weight * item.quantity for item in items), 0.0)


def encumbrance_limits(strength: int) -> EncumbranceLimits:
    """Load thresholds for a strength score."""
    return EncumbranceLimits(light=strength * 10, medium=strength * 20, heavy=strength * 30)


def encumbrance_level(weight: float, strength: int) -> EncumbranceTier:
    """Classify carried weight against strength.

    Example:
        With strength 15: 50 lb is unencumbered, 200 lb lightly
        encumbered and 500 lb heavily encumbered.
    """
    limits = encumbrance_limits(strength)
    if weight <= limits.light:
        return EncumbranceTier.UNENCUMBERED
    if weight <= limits.medium:
        return EncumbranceTier.LIGHTLY_ENCUMBERED
    return EncumbranceTier.HEAVILY_ENCUMBERED


def encumbrance_penalties(tier: EncumbranceTier | str) -> EncumbrancePenalties:
    """Penalties for an encumbrance tier; only heavy loads carry any."""
    if EncumbranceTier(tier) == EncumbranceTier.HEAVILY_ENCUMBERED:
        return EncumbrancePenalties(
            armor_check_penalty=HEAVY_LOAD_ARMOR_CHECK_PENALTY,
            movement_reduction=HEAVY_LOAD_MOVEMENT_REDUCTION,
        )
    return EncumbrancePenalties()


def load_status(weight: float, strength: int) -> LoadStatus:
    """Weight, tier, penalties and how full the heavy load is."""
    limits = encumbrance_limits(strength)
    tier = encumbrance_level(weight, strength)
    percent = int(weight * 100 // limits.heavy) if limits.heavy > 0 else 100
    return LoadStatus(
        total_weight=weight,
        limits=limits,
        tier=tier,
        penalties=encumbrance_penalties(tier),
        percent_of_heavy=percent,
    )


# =============================================================================
# Weapons
# =============================================================================


def _parse_damage(expression: str) -> tuple[int, int, int]:
    """Split a damage expression into dice count, die size and flat bonus.

    The expression is parsed by d20 and must reduce to one dice group plus
    or minus whole numbers, such as '1d8', '2d6+1' or '1d4 - 1'.

    Raises:
        ValidationError: If d20 rejects the expression or it has any other
            shape (several dice groups, multiplication, keep/drop operators).
    """
    try:
        tree = d20.parse(expression)
    except d20.RollSyntaxError as exc:
        raise ValidationError(
            f"Invalid damage expression: {expression}",
            field_name="damage",
            invalid_value=expression,
        ) from exc

    dice: list[diceast.Dice] = []
    flat = 0
    unsupported = False

    def traverse(node: Any, sign: int) -> None:
        nonlocal flat, unsupported
        if isinstance(node, diceast.Dice):
            if sign < 0 or not isinstance(node.size, int) or node.num < 1 or node.size < 1:
                unsupported = True
            dice.append(node)
        elif isinstance(node, diceast.Literal) and isinstance(node.value, int):
            flat += sign * node.value
        elif isinstance(node, diceast.BinOp) and node.op in ("+", "-"):
            traverse(node.left, sign)
            traverse(node.right, -sign if node.op == "-" else sign)
        elif isinstance(node, diceast.UnOp) and node.op in ("+", "-"):
            traverse(node.value, -sign if node.op == "-" else sign)
        elif isinstance(node, (diceast.Parenthetical, diceast.AnnotatedNumber)):
            traverse(node.value, sign)
        else:
            unsupported = True

    traverse(tree.roll, 1)
    if unsupported or len(dice) != 1:
        raise ValidationError(
            f"Unsupported damage expression: {expression}",
            field_name="damage",
            invalid_value=expression,
        )
    return dice[0].num, dice[0].size, flat


def weapon_damage(item: EquippedItem, str_modifier: int) -> WeaponDamage:
    """Damage of a weapon with the strength modifier applied.

    Args:
        item: A weapon with a damage expression such as '1d8' or '2d6+1'.
        str_modifier: Wielder's strength modifier.

    Returns:
        WeaponDamage with the combined expression and its range. The
        minimum is never below 1.

    Raises:
        ValidationError: If the item is not a weapon or its damage is not a
            single dice group with a flat modifier.
    """
    if item.category != ItemCategory.WEAPON or not item.damage:
        raise ValidationError(
            "Item is not a weapon with damage",
            field_name="damage",
            invalid_value=item.item_id,
        )

    dice_count, dice_size, flat = _parse_damage(item.damage)
    modifier = flat + str_modifier

    dice = f"{dice_count}d{dice_size}"
    total_damage = f"{dice}{modifier:+d}" if modifier else dice

    minimum = max(1, dice_count + modifier)
    maximum = max(1, dice_count * dice_size + modifier)
    return WeaponDamage(
        base_damage=item.damage,
        total_damage=total_damage,
        dice_count=dice_count,
        dice_size=dice_size,
        modifier=modifier,
        minimum=minimum,
        maximum=maximum,
        average=max(1.0, dice_count * (dice_size + 1) / 2 + modifier),
    )


def summarize_equipment(
    items: Sequence[EquippedItem],
    abilities: AbilityScoreBlock,
) -> EquipmentSummary:
    """Derive weight, encumbrance and armor class for a set of items.

    Raises:
        ValidationError: If the equipped set is not wearable.
    """
    validate_equipment(items)
    total_weight = calculate_total_weight(items)
    tier = encumbrance_level(total_weight, abilities.total(Ability.STR))
    summary = EquipmentSummary(
        total_weight=total_weight,
        encumbrance=tier,
        penalties=encumbrance_penalties(tier),
        armor_class=calculate_ac(items, abilities.modifier(Ability.DEX)),
        items=tuple(items),
    )
    logger.debug(
        "Equipment summarized",
        items=len(items),
        total_weight=total_weight,
        encumbrance=tier.value,
        armor_class=summary.armor_class.total,
    )
    return summary


__all__ = [
    "MAX_EQUIPPED_ARMOR",
    "MAX_EQUIPPED_SHIELDS",
    "ArmorClassBreakdown",
    "EncumbranceLimits",
    "EncumbrancePenalties",
    "LoadStatus",
    "WeaponDamage",
    "EquipmentSummary",
    "calculate_ac",
    "validate_equipment",
    "calculate_total_weight",
    "encumbrance_limits",
    "encumbrance_level",
    "encumbrance_penalties",
    "load_status",
    "weapon_damage",
    "summarize_equipment",
]
