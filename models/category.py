"""Category model for transaction categorization."""

from dataclasses import dataclass
import uuid

DEFAULT_ICON = "📌"


@dataclass
class Category:
    """Represents a transaction category owned by a user.

    Attributes:
        id: Unique identifier within the user's categories of the same type.
        name: Display name.
        icon: Short glyph shown before the name.
        type: 'income' or 'expense'; the category only applies to that type.
        is_custom: True for user-created categories. Built-in categories
            cannot be deleted.
    """

    id: str
    name: str
    icon: str
    type: str
    is_custom: bool = False

    @property
    def label(self) -> str:
        """Display label, e.g. "🍔 Food"."""
        return f"{self.icon} {self.name}"


def new_category_id() -> str:
    """Generate a collision-resistant category ID."""
    return uuid.uuid4().hex
