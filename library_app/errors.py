"""
Exception types raised by the service layer.

Validation errors are bad input (or a guard on the data, such as removing a
user who still owes something). State errors mean the operation is not
allowed from the current state; controllers map them to HTTP responses.
"""


class LibraryError(Exception):
    pass


class ValidationError(LibraryError, ValueError):
    pass


class LibraryStateError(LibraryError):
    pass


class BorrowBlockedError(LibraryStateError):
    pass


class AlreadyReturnedError(LibraryStateError):
    pass


class AdminRequiredError(LibraryStateError):
    pass
