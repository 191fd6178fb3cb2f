"""Mock payment gateway enums."""

from enum import Enum


class GatewayMethod(str, Enum):
    """Payment methods offered by the mock gateway."""

    CARD = "card"
    UPI = "upi"
    NETBANKING = "netbanking"


class GatewayState(str, Enum):
    """States of one gateway session."""

    METHOD_SELECTION = "method_selection"
    CARD_FORM = "card_form"
    UPI_FORM = "upi_form"
    NETBANKING_BANK_SELECT = "netbanking_bank_select"
    NETBANKING_LOGIN = "netbanking_login"
    PROCESSING = "processing"
    SUCCESS = "success"
    FAILED = "failed"
    CLOSED = "closed"


class GatewayEvent(str, Enum):
    """Inputs that drive the gateway state machine."""

    SELECT_CARD = "select_card"
    SELECT_UPI = "select_upi"
    SELECT_NETBANKING = "select_netbanking"
    SUBMIT_CARD = "submit_card"
    SUBMIT_UPI = "submit_upi"
    SELECT_BANK = "select_bank"
    SUBMIT_BANK_LOGIN = "submit_bank_login"
    ACCEPT = "accept"
    DECLINE = "decline"
    BACK = "back"
    RETRY = "retry"
    CLOSE = "close"


class AttemptOutcome(str, Enum):
    """Outcome of a payment attempt."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"
