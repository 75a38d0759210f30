# orders/services/exceptions.py

"""
ORDER SUBMISSION ERRORS

Every failure of submit_order() is one of these (or a pricing / loyalty error
raised before anything is written). Views map each class to a status code.
"""


class OrderSubmissionError(Exception):
    """Base exception for order submission failures."""


class AuthenticationRequiredError(OrderSubmissionError):
    """Raised when no authenticated customer is attached to the submission."""


class OrderValidationError(OrderSubmissionError):
    """Raised when the submitted payload is malformed or out of bounds."""


class NegativeTotalError(OrderSubmissionError):
    """Raised when the discounted total would drop below zero."""


class OrderPersistenceError(OrderSubmissionError):
    """Raised when the order row cannot be written."""
