from library_app.models.admin import Admin
from library_app.models.user import User
from library_app.models.item import LibraryItem
from library_app.models.loan import Loan
from library_app.models.fine import Fine
from library_app.models.notification_log import NotificationLog
from library_app.policy import ItemType

__all__ = ["Admin", "User", "LibraryItem", "Loan", "Fine", "NotificationLog", "ItemType"]
