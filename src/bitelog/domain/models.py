"""Domain models for the food catalogue."""

from dataclasses import dataclass
from enum import Enum


class Unit(Enum):
    """Serving units, stored verbatim by member name."""

    GRAM = ("гр", "грамм")
    MILLILITER = ("мл", "миллилитр")
    LITER = ("л", "литр")
    PIECE = ("шт", "штука")
    PACK = ("упак", "упаковка")
    CUP = ("чш", "чашка")
    TABLESPOON = ("ст.л", "столовая ложка")
    TEASPOON = ("ч.л", "чайная ложка")
    SLICE = ("кус", "кусок")

    @property
    def short_name(self) -> str:
        return self.value[0]

    @property
    def full_name(self) -> str:
        return self.value[1]


@dataclass(frozen=True, eq=False)
class FoodCategory:
    """Lookup category for food items."""

    id: int | None
    name: str


@dataclass(frozen=True, eq=False)
class FoodComponent:
    """Weighted ingredient of a composite food item."""

    ingredient_food_item_id: int
    amount_in_grams: float
    id: int | None = None
    parent_food_item_id: int | None = None


@dataclass(frozen=True, eq=False)
class FoodItem:
    """Food item with macros per 100 g.

    Macro fields of a composite item are derived from its components and are
    recomputed on every read and write.
    """

    id: int | None
    name: str
    calories_per_100g: float
    serving_size_in_grams: float
    unit: Unit
    proteins_per_100g: float
    fats_per_100g: float
    carbs_per_100g: float
    is_composite: bool = False
    category: FoodCategory | None = None
    components: tuple[FoodComponent, ...] | None = None


def same_entity(first: object, second: object) -> bool:
    """Return True when both records are the same persisted entity.

    Records without an id are never the same entity as anything, including
    another unsaved record.
    """
    if first is None or second is None or type(first) is not type(second):
        return False
    first_id = getattr(first, "id", None)
    return first_id is not None and first_id == getattr(second, "id", None)
