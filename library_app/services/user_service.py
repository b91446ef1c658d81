from flask import current_app

from library_app.errors import AdminRequiredError, ValidationError
from library_app.repositories.user_repo import UserRepo
from library_app.services.borrow_service import BorrowService
from library_app.services.mail_service import MailService


class UserService:
    @staticmethod
    def register(user) -> bool:
        if user is None or not (user.user_id or "").strip():
            return False
        if UserRepo.get_by_user_id(user.user_id):
            return False
        UserRepo.add(user)
        UserRepo.commit()
        return True

    @staticmethod
    def unregister(user_id: str, admin, email_service=MailService) -> bool:
        """
        Remove a user. Only an authenticated admin may do it, and only for a
        user with no active loan and no unpaid fine. Loan and fine history
        stays in the database. The confirmation mail is best effort.
        """
        if admin is None:
            raise AdminRequiredError("Only administrators can unregister users.")
        if not user_id:
            return False

        user = UserRepo.get_by_user_id(user_id)
        if not user:
            return False

        if BorrowService.active_loans(user):
            raise ValidationError("Cannot unregister user with active loans. Please return all borrowed items first.")
        if BorrowService.has_unpaid_fines(user):
            raise ValidationError("Cannot unregister user with unpaid fines. Please pay all fines first.")

        name, email = user.name, user.email
        UserRepo.delete(user)
        UserRepo.commit()
        current_app.logger.info(f"[users] {user_id} unregistered by {admin.username}")

        if email:
            UserService._send_unregistration_notice(email_service, name, email)
        return True

    @staticmethod
    def _send_unregistration_notice(email_service, name: str, email: str) -> None:
        subject = "Account Unregistration Confirmation"
        body = (
            f"Dear {name},\n\n"
            "Your library account has been unregistered. "
            "If you have any questions, please contact the library.\n\n"
            "Thank you."
        )
        try:
            if not email_service.send_email(email, subject, body):
                current_app.logger.warning(f"[users] unregistration mail to {email} was not delivered")
        except Exception as e:
            current_app.logger.warning(f"[users] unregistration mail to {email} failed: {e}")

    @staticmethod
    def find(user_id: str):
        if not user_id:
            return None
        return UserRepo.get_by_user_id(user_id)

    @staticmethod
    def is_registered(user_id: str) -> bool:
        return UserService.find(user_id) is not None

    @staticmethod
    def list_users():
        return UserRepo.list_all()
