"""Error taxonomy shared by the storage and service layers."""


class DataAccessError(Exception):
    """Storage failure that is not a constraint violation."""


class ConstraintViolationError(DataAccessError):
    """NOT NULL, CHECK or otherwise unclassified constraint violation."""


class DuplicateKeyError(ConstraintViolationError):
    """Unique constraint violation."""


class ForeignKeyViolationError(ConstraintViolationError):
    """Referential integrity violation."""


class ServiceError(Exception):
    """Business rule violation detected before any write."""


class DuplicateNameError(ServiceError):
    """A record with the same name already exists."""

    def __init__(self, entity: str, name: str) -> None:
        super().__init__(f"{entity} with name {name!r} already exists")
        self.entity = entity
        self.name = name


class IngredientNotFoundError(ServiceError):
    """A component references a food item that does not exist."""

    def __init__(self, ingredient_id: int, operation: str) -> None:
        super().__init__(
            f"Ingredient with id {ingredient_id} not found while {operation}"
        )
        self.ingredient_id = ingredient_id
        self.operation = operation


class CyclicDependencyError(ServiceError):
    """An ingredient includes, directly or transitively, the item itself."""

    def __init__(self, food_item: str, ingredient_id: int, operation: str) -> None:
        super().__init__(
            f"Cyclic dependency while {operation}: food item {food_item} cannot "
            f"contain ingredient with id {ingredient_id} which already "
            "contains it"
        )
        self.food_item = food_item
        self.ingredient_id = ingredient_id
        self.operation = operation


class InvalidFoodItemError(ServiceError):
    """Food item payload violates a structural invariant."""


class InvalidMealEntryError(ServiceError):
    """Meal entry payload violates a structural invariant."""
