from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from flask import current_app

from library_app.models.fine import Fine, to_money
from library_app.policy import ItemType, LibraryPolicy
from library_app.repositories.fine_repo import FineRepo
from library_app.repositories.loan_repo import LoanRepo


@dataclass
class OverdueReport:
    user_id: str
    report_date: date
    total_items: int = 0
    total_fine: int = 0
    by_type: dict = field(default_factory=dict)

    def to_dict(self):
        return {
            "user": self.user_id,
            "report_date": self.report_date.isoformat(),
            "total_items": self.total_items,
            "total_fine": self.total_fine,
            "by_type": self.by_type,
        }


class OverdueDetectionService:
    """
    Finds overdue loans and prices them with the per-type fine strategies of
    the policy it was built with.
    """

    def __init__(self, policy: LibraryPolicy):
        if policy is None:
            raise ValueError("policy is required")
        self.policy = policy

    def overdue_loans(self, as_of: date = None):
        return LoanRepo.find_overdue(as_of or date.today())

    def overdue_loans_for_user(self, user, as_of: date = None):
        if user is None or user.id is None:
            return []
        return LoanRepo.find_overdue(as_of or date.today(), user_pk=user.id)

    def is_overdue(self, loan, as_of: date = None) -> bool:
        if loan is None:
            return False
        return loan.is_overdue(as_of or date.today())

    def days_overdue(self, loan, as_of: date = None) -> int:
        if loan is None:
            return 0
        return loan.days_overdue(as_of or date.today())

    def fine_for(self, loan, as_of: date = None, item_type=None) -> int:
        """Fine accrued so far on ``loan``; ``item_type`` overrides the loan's own type."""
        if loan is None:
            return 0
        days = loan.days_overdue(as_of or date.today())
        if days <= 0:
            return 0
        strategy = self.policy.strategy_for(item_type if item_type is not None else loan.item_type)
        return strategy.calculate_fine(days)

    def mixed_media_report(self, user, as_of: date = None) -> OverdueReport | None:
        if user is None:
            return None
        as_of = as_of or date.today()
        report = OverdueReport(user_id=user.user_id, report_date=as_of)

        grouped = {}
        for loan in self.overdue_loans_for_user(user, as_of):
            grouped.setdefault(ItemType.parse(loan.item_type), []).append(loan)

        for item_type, loans in grouped.items():
            strategy = self.policy.strategy_for(item_type)
            type_fine = sum(strategy.calculate_fine(loan.days_overdue(as_of)) for loan in loans)
            report.by_type[item_type.name] = {"count": len(loans), "total_fine": type_fine}
            report.total_items += len(loans)
            report.total_fine += type_fine

        return report

    def assess_fines(self, as_of: date = None) -> int:
        """
        Charge every overdue loan. A loan without a fine gets one; an unpaid
        fine grows by whatever accrued since it was last assessed; paid fines
        are left alone. No commit, the caller owns the transaction.
        """
        as_of = as_of or date.today()
        changed = 0

        for loan in self.overdue_loans(as_of):
            if loan.user is None:
                continue
            accrued = to_money(self.fine_for(loan, as_of))
            fine = FineRepo.get_by_loan(loan.id)

            if fine is None:
                FineRepo.add(Fine.charge(loan.user, accrued, loan=loan))
                changed += 1
                continue

            if fine.is_paid:
                continue

            extra = accrued - to_money(fine.assessed_amount)
            if extra > 0:
                fine.add_charge(extra)
                changed += 1

        current_app.logger.info(f"[overdue] assessed fines as_of={as_of} changed={changed}")
        return changed


def get_overdue_service() -> OverdueDetectionService:
    return current_app.extensions["overdue_service"]
