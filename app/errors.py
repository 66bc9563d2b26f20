class CheckoutError(Exception):
    """Base class for failures the route handlers map to a response."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ClientInputError(CheckoutError):
    status_code = 400


class PaymentNotConfirmedError(CheckoutError):
    status_code = 400

    def __init__(self, status: str):
        super().__init__("Payment not confirmed. Status: " + str(status))
        self.status = status


class PersistenceError(CheckoutError):
    """Purchase insert failed. Never surfaced to the caller."""


class NotificationError(CheckoutError):
    """Access email could not be delivered."""
