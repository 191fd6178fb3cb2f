"""Domain exceptions for the Refund Microservice."""


class RefundServiceError(Exception):
    """Base exception for refund and mock payment errors."""

    pass


class InvalidRequestError(RefundServiceError):
    """Raised when caller input is missing or malformed. Nothing is mutated."""

    pass


class InvalidTimestampError(InvalidRequestError):
    """Raised when the evaluation instant precedes the order placement."""

    def __init__(self, placed_at: str, now: str) -> None:
        self.placed_at = placed_at
        self.now = now
        super().__init__(f"Evaluation time {now} is before order placement {placed_at}")


class IncompleteCredentialsError(InvalidRequestError):
    """Raised when a gateway form is submitted with required fields missing."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        super().__init__(f"Missing required fields: {', '.join(missing)}")


class UnknownBankError(InvalidRequestError):
    """Raised when a net-banking bank id is not in the registry."""

    def __init__(self, bank_id: str) -> None:
        self.bank_id = bank_id
        super().__init__(f"Bank '{bank_id}' is not supported")


class InvalidTransitionError(InvalidRequestError):
    """Raised when a gateway event is not allowed in the current state."""

    def __init__(self, state: str, event: str) -> None:
        self.state = state
        self.event = event
        super().__init__(f"Event '{event}' is not allowed in state '{state}'")


class AuthenticationError(RefundServiceError):
    """Raised when the bearer token is missing or invalid."""

    def __init__(self, reason: str = "Invalid authentication credentials") -> None:
        super().__init__(reason)


class ForbiddenError(RefundServiceError):
    """Raised when the actor does not own or operate the order in the claimed role."""

    def __init__(self, order_id: str, role: str) -> None:
        self.order_id = order_id
        self.role = role
        super().__init__(f"Not authorized to act on order '{order_id}' as {role}")


class OrderNotFoundError(RefundServiceError):
    """Raised when an order is not found."""

    def __init__(self, order_id: str) -> None:
        self.order_id = order_id
        super().__init__(f"Order with ID '{order_id}' not found")


class AlreadyCancelledError(RefundServiceError):
    """Raised when cancelling an order that is no longer in placed status."""

    def __init__(self, order_id: str, status: str) -> None:
        self.order_id = order_id
        self.status = status
        super().__init__(f"Order '{order_id}' cannot be cancelled (status: {status})")


class ConflictingPaymentError(RefundServiceError):
    """Raised when an order already settled by another payment is verified again."""

    def __init__(self, order_id: str, existing_payment_id: str) -> None:
        self.order_id = order_id
        self.existing_payment_id = existing_payment_id
        super().__init__(
            f"Order '{order_id}' is already paid with payment '{existing_payment_id}'"
        )


class OrderNotPayableError(RefundServiceError):
    """Raised when verifying a payment for an order that is no longer placed."""

    def __init__(self, order_id: str, status: str) -> None:
        self.order_id = order_id
        self.status = status
        super().__init__(f"Order '{order_id}' cannot be paid (status: {status})")


class InvalidPaymentSignatureError(RefundServiceError):
    """Raised when a mock payment signature does not match."""

    def __init__(self, reason: str = "Invalid signature") -> None:
        super().__init__(f"Payment verification failed: {reason}")


class PolicyLookupError(RefundServiceError, KeyError):
    """Raised when the policy table has no row for a method/role pair."""

    def __init__(self, payment_method: str, role: str) -> None:
        self.payment_method = payment_method
        self.role = role
        super().__init__(f"No refund policy for {payment_method} cancelled by {role}")

    def __str__(self) -> str:
        return self.args[0]
