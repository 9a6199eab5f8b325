"""Domain value types for the comment engine."""

from enum import Enum

from forum.domain.error import ValidationError


class CommentSortOrder(str, Enum):
    """Ranking policy applied to every sibling list of a comment thread."""

    TOP = "top"  # score DESC
    NEW = "new"  # created_utc DESC
    OLD = "old"  # created_utc ASC
    CONTROVERSIAL = "controversial"  # controversy metric DESC

    @classmethod
    def parse(cls, value: "str | CommentSortOrder | None") -> "CommentSortOrder":
        """Parse a sort identifier, falling back to TOP when none is given.

        Args:
            value: Sort identifier such as "new", or None

        Returns:
            Matching sort order

        Raises:
            ValidationError: If the identifier is not a known sort order
        """
        if value is None:
            return cls.TOP
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(order.value for order in cls)
            raise ValidationError(
                f"Unknown comment sort '{value}', expected one of: {allowed}"
            ) from None
