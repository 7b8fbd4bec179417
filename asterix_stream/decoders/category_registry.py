from typing import Dict, Iterable, Optional, Tuple

from asterix_stream.types.enums import CAT034Item, CAT048Item, Category


class CategoryRegistry:
    """
    Category number -> UAP (ordered item identifiers).
    Position i of the UAP is consumed by FSPEC bit i.
    """

    def __init__(self) -> None:
        self._uaps: Dict[int, Tuple[str, ...]] = {}

    def register_category(self, category: int, uap: Iterable[str]) -> None:
        """Add a category, or replace the UAP of an existing one (new edition)."""
        if not 0 <= int(category) <= 255:
            raise ValueError(f"Category must fit in one byte, got {category}")
        self._uaps[int(category)] = tuple(uap)

    def lookup(self, category: int) -> Optional[Tuple[str, ...]]:
        """UAP of `category`, or None when the category is not registered."""
        return self._uaps.get(category)

    def categories(self) -> Tuple[int, ...]:
        return tuple(sorted(self._uaps))

    def __contains__(self, category: int) -> bool:
        return category in self._uaps

    def __len__(self) -> int:
        return len(self._uaps)


def default_category_registry() -> CategoryRegistry:
    registry = CategoryRegistry()
    registry.register_category(Category.CAT034.value, CAT034Item.UAP)
    registry.register_category(Category.CAT048.value, CAT048Item.UAP)
    return registry
