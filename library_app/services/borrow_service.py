from datetime import date
from decimal import Decimal

from flask import current_app

from library_app.errors import BorrowBlockedError, ValidationError
from library_app.models.fine import Fine, to_money
from library_app.models.loan import Loan
from library_app.repositories.fine_repo import FineRepo
from library_app.repositories.item_repo import ItemRepo
from library_app.repositories.loan_repo import LoanRepo


class BorrowService:
    """
    Borrowing, returning and paying fines.

    Guards run before anything is written, so a rejected call leaves the
    session untouched. Successful calls commit once at the end.
    """

    @staticmethod
    def borrow(user, item, as_of: date = None):
        """
        Lend ``item`` to ``user``. Returns the new loan, or None when the item
        is not available. Raises BorrowBlockedError when the user owes a fine
        or has an overdue item.
        """
        if user is None or item is None:
            raise ValidationError("user and item are required")
        if user.id is None:
            raise ValidationError(f"user {user.user_id!r} is not registered")
        as_of = as_of or date.today()

        if not item.available:
            current_app.logger.info(f"[borrow] {item!r} is not available")
            return None

        if BorrowService.has_unpaid_fines(user):
            raise BorrowBlockedError("Cannot borrow: user has unpaid fines.")
        if BorrowService.has_overdue_items(user, as_of):
            raise BorrowBlockedError("Cannot borrow: user has overdue items.")

        loan = Loan.open(item, user, as_of)
        item.available = False
        LoanRepo.add(loan)
        LoanRepo.commit()

        current_app.logger.info(
            f"[borrow] user={user.user_id} item={item.item_type.name}:{item.identifier} due={loan.due_date}"
        )
        return loan

    @staticmethod
    def return_item(loan, as_of: date = None):
        if loan is None:
            raise ValidationError("loan is required")
        as_of = as_of or date.today()

        # raises AlreadyReturnedError, nothing else is touched
        loan.mark_returned(as_of)

        item = ItemRepo.get_by_identifier(loan.item_type, loan.item_identifier)
        if item:
            item.available = True
        else:
            current_app.logger.warning(
                f"[borrow] returned loan {loan.id} refers to missing item "
                f"{loan.item_type.name}:{loan.item_identifier}"
            )

        LoanRepo.commit()
        return loan

    @staticmethod
    def pay_fine(user, amount) -> bool:
        """
        Spread ``amount`` over the user's unpaid fines, oldest first. Each fine
        is paid off in full while money remains; what is left goes to the next
        one. Anything beyond the total owed is dropped.
        """
        if user is None:
            return False
        try:
            amount = to_money(amount)
        except ArithmeticError:
            return False
        if not amount.is_finite() or amount <= 0:
            return False

        fines = FineRepo.list_unpaid_by_user(user.id)
        if not fines:
            return False

        remaining = amount
        for fine in fines:
            if remaining <= 0:
                break
            remaining -= fine.pay(remaining)

        FineRepo.commit()
        current_app.logger.info(
            f"[borrow] user={user.user_id} paid={amount} unused={max(remaining, Decimal('0.00'))}"
        )
        return True

    @staticmethod
    def can_borrow(user, as_of: date = None) -> bool:
        if user is None:
            return False
        as_of = as_of or date.today()
        return not BorrowService.has_unpaid_fines(user) and not BorrowService.has_overdue_items(user, as_of)

    @staticmethod
    def has_unpaid_fines(user) -> bool:
        if user is None or user.id is None:
            return False
        return FineRepo.has_unpaid(user.id)

    @staticmethod
    def has_overdue_items(user, as_of: date = None) -> bool:
        if user is None or user.id is None:
            return False
        as_of = as_of or date.today()
        return any(loan.is_overdue(as_of) for loan in LoanRepo.list_active_by_user(user.id))

    @staticmethod
    def active_loans(user):
        if user is None or user.id is None:
            return []
        return LoanRepo.list_active_by_user(user.id)

    @staticmethod
    def loans_for(user):
        if user is None or user.id is None:
            return []
        return LoanRepo.list_by_user(user.id)

    @staticmethod
    def unpaid_fines(user):
        if user is None or user.id is None:
            return []
        return FineRepo.list_unpaid_by_user(user.id)

    @staticmethod
    def add_fine(fine: Fine):
        if fine is None:
            return None
        FineRepo.add(fine)
        FineRepo.commit()
        return fine
