"""Transaction domain service."""

from datetime import date
from decimal import ROUND_DOWN, Decimal, InvalidOperation
from typing import Any, Optional

from fintrack.database.base import TransactionRepository
from fintrack.domain.aggregation import search_transactions, sort_transactions
from fintrack.domain.categories import resolve_category
from fintrack.domain.entities import Transaction, TransactionKind
from fintrack.domain.errors import (
    InvalidArgumentError,
    NotFoundError,
    transaction_not_found,
)
from fintrack.domain.notifications import NotificationEmitter
from fintrack.domain.periods import filter_by_period, select_period
from fintrack.domain.session import Session
from fintrack.logging_setup import get_logger
from fintrack.utils.date_parser import normalize_date

logger = get_logger(__name__)

MIN_DESCRIPTION_LENGTH = 2
AMOUNT_PLACES = 2
MAX_AMOUNT_DIGITS = 10


def validate_amount(amount: Any) -> Decimal:
    """Coerce an amount to Decimal and require it to be a positive cent value.

    Amounts are stored as NUMERIC(12, 2): at most two decimal places and ten
    integer digits.
    """
    try:
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    except InvalidOperation:
        raise InvalidArgumentError(f"Invalid amount '{amount}'") from None
    if not value.is_finite() or value <= 0:
        raise InvalidArgumentError("Amount must be greater than 0")
    if value.adjusted() >= MAX_AMOUNT_DIGITS:
        raise InvalidArgumentError(
            f"Amount '{amount}' exceeds {MAX_AMOUNT_DIGITS} integer digits"
        )
    if value != value.quantize(Decimal(1).scaleb(-AMOUNT_PLACES), rounding=ROUND_DOWN):
        raise InvalidArgumentError(
            f"Amount '{amount}' has more than {AMOUNT_PLACES} decimal places"
        )
    return value


def validate_description(description: Optional[str]) -> str:
    """Require a description of at least two characters."""
    text = (description or "").strip()
    if len(text) < MIN_DESCRIPTION_LENGTH:
        raise InvalidArgumentError(
            f"Description must be at least {MIN_DESCRIPTION_LENGTH} characters"
        )
    return text


class TransactionService:
    """Service for recording and editing expenses and income."""

    def __init__(
        self,
        repository: TransactionRepository,
        session: Session,
        emitter: Optional[NotificationEmitter] = None,
    ):
        """Initialize transaction service.

        Args:
            repository: Record storage
            session: Signed-in user
            emitter: Optional notification emitter invoked after creates
        """
        self.repository = repository
        self.session = session
        self.emitter = emitter

    def create_transaction(
        self,
        kind: TransactionKind | str,
        amount: Any,
        description: str,
        category: str,
        date: Any,
        notes: Optional[str] = None,
    ) -> str:
        """Create an expense or income record.

        Args:
            kind: "expense" or "income"
            amount: Positive amount
            description: Short display text (at least 2 characters)
            category: One of the kind's categories
            date: Transaction date (date, datetime or ISO string)
            notes: Optional notes

        Returns:
            Record ID

        Raises:
            InvalidArgumentError: If any field fails validation
        """
        kind = TransactionKind.parse(kind)
        fields = {
            "amount": validate_amount(amount),
            "description": validate_description(description),
            "category": resolve_category(kind, category),
            "date": normalize_date(date),
            "notes": (notes or "").strip() or None,
        }

        transaction_id = self.repository.create(self.session.user_id, kind, fields)
        logger.info("Created %s %s", kind.value, transaction_id)

        if self.emitter is not None:
            record = Transaction(id=transaction_id, kind=kind, **fields)
            self.emitter.emit(self.session.user_id, record)

        return transaction_id

    def get_transaction(
        self, kind: TransactionKind | str, transaction_id: str
    ) -> Optional[Transaction]:
        """Get a record by ID, or None if not found."""
        kind = TransactionKind.parse(kind)
        return self.repository.get(self.session.user_id, kind, transaction_id)

    def require_transaction(
        self, kind: TransactionKind | str, transaction_id: str
    ) -> Transaction:
        """Get a record by ID.

        Raises:
            NotFoundError: If the record does not exist
        """
        kind = TransactionKind.parse(kind)
        record = self.repository.get(self.session.user_id, kind, transaction_id)
        if record is None:
            raise NotFoundError(transaction_not_found(kind.value, transaction_id))
        return record

    def update_transaction(
        self,
        kind: TransactionKind | str,
        transaction_id: str,
        amount: Any = None,
        description: Optional[str] = None,
        category: Optional[str] = None,
        date: Any = None,
        notes: Optional[str] = None,
        clear_notes: bool = False,
    ) -> None:
        """Update record fields.

        Only the fields that are provided are replaced. Each provided field is
        validated the same way as on create.

        Raises:
            NotFoundError: If the record does not exist
            InvalidArgumentError: If a field fails validation
        """
        kind = TransactionKind.parse(kind)
        self.require_transaction(kind, transaction_id)

        fields: dict[str, Any] = {}
        if amount is not None:
            fields["amount"] = validate_amount(amount)
        if description is not None:
            fields["description"] = validate_description(description)
        if category is not None:
            fields["category"] = resolve_category(kind, category)
        if date is not None:
            fields["date"] = normalize_date(date)
        if clear_notes:
            fields["notes"] = None
        elif notes is not None:
            fields["notes"] = notes.strip() or None

        if not fields:
            return

        self.repository.update(self.session.user_id, kind, transaction_id, fields)
        logger.info("Updated %s %s (%s)", kind.value, transaction_id, ", ".join(fields))

    def delete_transaction(self, kind: TransactionKind | str, transaction_id: str) -> None:
        """Delete a record.

        Raises:
            NotFoundError: If the record does not exist
        """
        kind = TransactionKind.parse(kind)
        self.require_transaction(kind, transaction_id)
        self.repository.delete(self.session.user_id, kind, transaction_id)
        logger.info("Deleted %s %s", kind.value, transaction_id)

    def list_transactions(
        self,
        kind: TransactionKind | str,
        search: Optional[str] = None,
        category: Optional[str] = None,
        sort_by: str = "date",
        period: Optional[str] = None,
        today: Optional[date] = None,
    ) -> list[Transaction]:
        """List records of one kind with optional filters.

        Args:
            kind: "expense" or "income"
            search: Case-insensitive text matched against description and notes
            category: Exact category filter
            sort_by: "date" (newest first) or "amount" (largest first)
            period: Optional named period
            today: Anchor day for the period (defaults to the current day)
        """
        kind = TransactionKind.parse(kind)
        if category is not None:
            category = resolve_category(kind, category)
        records = self.repository.list_records(self.session.user_id, kind)

        if period is not None:
            start, end = select_period(period, today or date.today())
            records = filter_by_period(records, start, end)

        records = search_transactions(records, term=search, category=category)
        return sort_transactions(records, sort_by)
