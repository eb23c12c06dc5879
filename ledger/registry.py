"""In-memory registry of a user's categories, partitioned by type."""

from typing import Dict, Iterable, List, Optional

from errors import ValidationError
from models.category import Category
from models.transaction import EXPENSE, INCOME, KINDS, Transaction

UNCATEGORIZED_LABEL = "Uncategorized"


class CategoryRegistry:
    """Holds category definitions split into income and expense partitions.

    Lookups are scoped to a partition: an expense category is not visible
    when resolving an income transaction and vice versa.
    """

    def __init__(self, categories: Iterable[Category] = ()):
        self._partitions: Dict[str, List[Category]] = {INCOME: [], EXPENSE: []}
        for category in categories:
            self.add(category)

    def add(self, category: Category) -> Category:
        """Append a category to the partition matching its type.

        Raises:
            ValidationError: If the type is unknown or the ID is already used
                             in that partition.
        """
        if category.type not in KINDS:
            raise ValidationError("Unknown category type", ["type"])
        if self.find(category.id, category.type) is not None:
            raise ValidationError(
                f"Category ID '{category.id}' already exists for {category.type}",
                ["id"],
            )

        self._partitions[category.type].append(category)
        return category

    def remove(self, category_id: str, type: str) -> bool:
        partition = self._partitions.get(type, [])
        for index, category in enumerate(partition):
            if category.id == category_id:
                del partition[index]
                return True
        return False

    def replace(self, categories: Iterable[Category]) -> None:
        """Drop all categories and load the given ones instead."""
        self._partitions = {INCOME: [], EXPENSE: []}
        for category in categories:
            self.add(category)

    def find(self, category_id: Optional[str], type: str) -> Optional[Category]:
        for category in self._partitions.get(type, []):
            if category.id == category_id:
                return category
        return None

    def all(self, type: Optional[str] = None) -> List[Category]:
        """Get categories in insertion order, optionally for one type only."""
        if type is not None:
            return list(self._partitions.get(type, []))
        return self._partitions[INCOME] + self._partitions[EXPENSE]

    def resolve_label(self, category_id: Optional[str], type: str) -> str:
        """Get the display label for a category reference.

        Never raises. Unknown IDs (including IDs that belong to the other
        type) fall back to the ID itself, and a missing ID falls back to
        "Uncategorized", so a label is always non-empty.

        Args:
            category_id: The referenced category ID, possibly unknown or None.
            type: Type of the transaction holding the reference.

        Returns:
            "{icon} {name}" for a known category, otherwise the fallback.
        """
        category = self.find(category_id, type)
        if category is not None:
            return category.label
        if category_id is None or not str(category_id).strip():
            return UNCATEGORIZED_LABEL
        return str(category_id)

    def can_delete(
        self, category_id: str, type: str, transactions: Iterable[Transaction]
    ) -> bool:
        """Check whether a category may be deleted.

        Only custom categories that no transaction references can go. The
        reference check matches on ID alone, regardless of transaction type.
        """
        category = self.find(category_id, type)
        if category is None or not category.is_custom:
            return False
        return not any(t.category_id == category_id for t in transactions)

    def __len__(self) -> int:
        return sum(len(partition) for partition in self._partitions.values())
