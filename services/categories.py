"""Category service for database operations."""

from typing import List, Optional
from models.category import Category

_CATEGORY_SELECT_FIELDS = "id, name, icon, category_type, is_custom"


class CategoryService:
    """Service for managing a user's categories."""

    def __init__(self, db_manager):
        """Initialize the category service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def list(self, user_email: str) -> List[Category]:
        """Get all categories owned by a user.

        Args:
            user_email: Owner of the categories.

        Returns:
            List of Category objects, ordered by name.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"""
                SELECT {_CATEGORY_SELECT_FIELDS}
                FROM categories
                WHERE user_email = ?
                ORDER BY name, category_type
                """,
                (user_email,),
            )
            rows = cursor.fetchall()

            return [self._row_to_category(row) for row in rows]

    def find(self, user_email: str, category_id: str, type: str) -> Optional[Category]:
        """Get a single category by ID.

        Args:
            user_email: Owner of the category.
            category_id: The category ID to find.
            type: 'income' or 'expense'. IDs are unique per type.

        Returns:
            Category object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"""
                SELECT {_CATEGORY_SELECT_FIELDS}
                FROM categories
                WHERE user_email = ? AND category_type = ? AND id = ?
                """,
                (user_email, type, category_id),
            )
            row = cursor.fetchone()

            if row:
                return self._row_to_category(row)
            return None

    def create(self, user_email: str, category: Category) -> Category:
        """Create a new category.

        Args:
            user_email: Owner of the category.
            category: Category to insert. Its ID is kept.

        Returns:
            The same Category object.

        Raises:
            sqlite3.IntegrityError: If the user already has a category with this ID and type.
        """
        with self.db_manager.connect() as conn:
            conn.execute(
                """
                INSERT INTO categories (id, user_email, name, icon, category_type, is_custom)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    category.id,
                    user_email,
                    category.name,
                    category.icon,
                    category.type,
                    int(category.is_custom),
                ),
            )
            conn.commit()

        return category

    def delete(self, user_email: str, category_id: str, type: str) -> bool:
        """Delete a category by ID.

        Args:
            user_email: Owner of the category.
            category_id: The category ID to delete.
            type: 'income' or 'expense'.

        Returns:
            True if category was deleted, False if not found.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "DELETE FROM categories WHERE user_email = ? AND category_type = ? AND id = ?",
                (user_email, type, category_id),
            )
            conn.commit()
            return cursor.rowcount > 0

    def _row_to_category(self, row: tuple) -> Category:
        return Category(
            id=row[0],
            name=row[1],
            icon=row[2] or "",
            type=row[3],
            is_custom=bool(row[4]),
        )
