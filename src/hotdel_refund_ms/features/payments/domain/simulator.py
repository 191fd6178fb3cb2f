"""Mock payment gateway state machine.

``transition`` is the complete, pure transition table. The simulator drives
one checkout session through it, decides acceptance with the registry and
reports the terminal attempt. It never touches an order; settlement is the
verification service's job.
"""

import asyncio
import hashlib
import hmac
import secrets
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import replace
from decimal import Decimal
from types import MappingProxyType

from hotdel_refund_ms.features.payments.domain.entities import (
    CardCredential,
    Credential,
    NetbankingCredential,
    PaymentAttempt,
    UpiCredential,
)
from hotdel_refund_ms.features.payments.domain.enums import (
    AttemptOutcome,
    GatewayEvent,
    GatewayMethod,
    GatewayState,
)
from hotdel_refund_ms.features.payments.domain.registry import (
    Bank,
    PaymentMethodRegistry,
)
from hotdel_refund_ms.shared.core.logging import get_logger
from hotdel_refund_ms.shared.domain.exceptions import (
    IncompleteCredentialsError,
    InvalidTransitionError,
    RefundServiceError,
)

logger = get_logger(__name__)

DECLINE_REASON = "Payment declined by bank"

S = GatewayState
E = GatewayEvent

TRANSITIONS: Mapping[GatewayState, Mapping[GatewayEvent, GatewayState]] = MappingProxyType(
    {
        S.METHOD_SELECTION: {
            E.SELECT_CARD: S.CARD_FORM,
            E.SELECT_UPI: S.UPI_FORM,
            E.SELECT_NETBANKING: S.NETBANKING_BANK_SELECT,
            E.CLOSE: S.CLOSED,
        },
        S.CARD_FORM: {
            E.SUBMIT_CARD: S.PROCESSING,
            E.BACK: S.METHOD_SELECTION,
            E.CLOSE: S.CLOSED,
        },
        S.UPI_FORM: {
            E.SUBMIT_UPI: S.PROCESSING,
            E.BACK: S.METHOD_SELECTION,
            E.CLOSE: S.CLOSED,
        },
        S.NETBANKING_BANK_SELECT: {
            E.SELECT_BANK: S.NETBANKING_LOGIN,
            E.BACK: S.METHOD_SELECTION,
            E.CLOSE: S.CLOSED,
        },
        S.NETBANKING_LOGIN: {
            E.SUBMIT_BANK_LOGIN: S.PROCESSING,
            E.BACK: S.NETBANKING_BANK_SELECT,
            E.CLOSE: S.CLOSED,
        },
        S.PROCESSING: {
            E.ACCEPT: S.SUCCESS,
            E.DECLINE: S.FAILED,
            E.CLOSE: S.CLOSED,
        },
        S.SUCCESS: {E.CLOSE: S.CLOSED},
        S.FAILED: {E.RETRY: S.METHOD_SELECTION, E.CLOSE: S.CLOSED},
        S.CLOSED: {},
    }
)

METHOD_EVENTS = {
    GatewayMethod.CARD: E.SELECT_CARD,
    GatewayMethod.UPI: E.SELECT_UPI,
    GatewayMethod.NETBANKING: E.SELECT_NETBANKING,
}

Reporter = Callable[[PaymentAttempt], Awaitable[object]]
Sleep = Callable[[float], Awaitable[object]]


def transition(state: GatewayState, event: GatewayEvent) -> GatewayState:
    """Next state for ``event``; raises InvalidTransitionError if not allowed."""
    try:
        return TRANSITIONS[state][event]
    except KeyError:
        raise InvalidTransitionError(state.value, event.value) from None


class MockPaymentSigner:
    """Issues payment ids and HMAC signatures for accepted attempts."""

    def __init__(self, secret: str) -> None:
        self._secret = secret.encode()

    def new_payment_id(self) -> str:
        return f"pay_{secrets.token_hex(12)}"

    def sign(self, order_id: str, payment_id: str) -> str:
        message = f"{order_id}|{payment_id}".encode()
        return hmac.new(self._secret, message, hashlib.sha256).hexdigest()

    def verify(self, order_id: str, payment_id: str, signature: str) -> bool:
        # Timing-safe comparison
        return hmac.compare_digest(self.sign(order_id, payment_id), signature or "")


class PaymentGatewaySimulator:
    """
    One checkout session of the mock gateway.

    Forms are submitted with complete credentials only; the session then
    sits in ``processing`` for the two configured delays before settling on
    ``success`` or ``failed``. Closing the session while it is processing
    discards the attempt and nothing is reported.

    A reporter that rejects the attempt with a service error (for example a
    conflicting payment for an already settled order) does not undo the
    terminal state: the attempt is still returned and the error is kept in
    ``report_error``.
    """

    def __init__(
        self,
        order_id: str,
        amount: Decimal,
        registry: PaymentMethodRegistry,
        signer: MockPaymentSigner,
        *,
        processing_delay: float = 3.0,
        confirmation_delay: float = 2.0,
        sleep: Sleep = asyncio.sleep,
        on_success: Reporter | None = None,
        on_failure: Reporter | None = None,
    ) -> None:
        self.order_id = order_id
        self.amount = amount
        self._registry = registry
        self._signer = signer
        self._delays = (processing_delay, confirmation_delay)
        self._sleep = sleep
        self._on_success = on_success
        self._on_failure = on_failure

        self._state = GatewayState.METHOD_SELECTION
        self._bank: Bank | None = None
        self._attempt: PaymentAttempt | None = None
        self._report_error: RefundServiceError | None = None

    @property
    def state(self) -> GatewayState:
        return self._state

    @property
    def attempt(self) -> PaymentAttempt | None:
        """The current or last finished attempt of this session."""
        return self._attempt

    @property
    def selected_bank(self) -> Bank | None:
        return self._bank

    @property
    def report_error(self) -> RefundServiceError | None:
        """Error raised by the reporter for the last finished attempt."""
        return self._report_error

    def select_method(self, method: GatewayMethod) -> GatewayState:
        self._state = transition(self._state, METHOD_EVENTS[method])
        return self._state

    def select_bank(self, bank_id: str) -> GatewayState:
        next_state = transition(self._state, E.SELECT_BANK)
        self._bank = self._registry.bank(bank_id)
        self._state = next_state
        return self._state

    def back(self) -> GatewayState:
        self._state = transition(self._state, E.BACK)
        if self._state is S.NETBANKING_BANK_SELECT:
            self._bank = None
        return self._state

    def retry(self) -> GatewayState:
        self._state = transition(self._state, E.RETRY)
        self._attempt = None
        self._bank = None
        return self._state

    def close(self) -> GatewayState:
        self._state = transition(self._state, E.CLOSE)
        self._attempt = None
        return self._state

    async def submit_card(self, credential: CardCredential) -> PaymentAttempt | None:
        transition(self._state, E.SUBMIT_CARD)
        self._require_complete(credential)
        accepted = self._registry.accepts_card(credential)
        return await self._process(GatewayMethod.CARD, credential, accepted)

    async def submit_upi(self, credential: UpiCredential) -> PaymentAttempt | None:
        transition(self._state, E.SUBMIT_UPI)
        self._require_complete(credential)
        accepted = self._registry.accepts_upi(credential)
        return await self._process(GatewayMethod.UPI, credential, accepted)

    async def submit_bank_login(self, user_id: str, password: str) -> PaymentAttempt | None:
        transition(self._state, E.SUBMIT_BANK_LOGIN)
        credential = NetbankingCredential(
            bank_id=self._bank.id if self._bank else "",
            user_id=user_id,
            password=password,
        )
        self._require_complete(credential)
        accepted = self._registry.accepts_netbanking(credential)
        return await self._process(GatewayMethod.NETBANKING, credential, accepted)

    @staticmethod
    def _require_complete(credential: Credential) -> None:
        missing = credential.missing_fields()
        if missing:
            raise IncompleteCredentialsError(missing)

    async def _process(
        self,
        method: GatewayMethod,
        credential: Credential,
        accepted: bool,
    ) -> PaymentAttempt | None:
        self._state = S.PROCESSING
        self._report_error = None
        attempt = PaymentAttempt(
            order_id=self.order_id,
            amount=self.amount,
            method=method,
            credential=credential,
        )
        self._attempt = attempt

        for delay in self._delays:
            await self._sleep(delay)
            if self._state is not S.PROCESSING:
                # Closed while processing
                return None

        if accepted:
            payment_id = self._signer.new_payment_id()
            attempt = replace(
                attempt,
                outcome=AttemptOutcome.ACCEPTED,
                reference_id=payment_id,
                signature=self._signer.sign(self.order_id, payment_id),
            )
            self._state = transition(self._state, E.ACCEPT)
            reporter = self._on_success
        else:
            attempt = replace(
                attempt,
                outcome=AttemptOutcome.DECLINED,
                decline_reason=DECLINE_REASON,
            )
            self._state = transition(self._state, E.DECLINE)
            reporter = self._on_failure

        self._attempt = attempt
        if reporter is not None:
            try:
                await reporter(attempt)
            except RefundServiceError as e:
                logger.warning(
                    "payment_report_rejected",
                    order_id=self.order_id,
                    outcome=attempt.outcome.value,
                    error=str(e),
                )
                self._report_error = e
        return attempt
