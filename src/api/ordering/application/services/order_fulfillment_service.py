"""Order fulfillment application service.

Turns a cart into an order in one database transaction: re-validate the
cart, price it, draw an order number, persist addresses, the order and its
line items, then decrement stock with guarded updates. Either everything
commits or nothing does. The audit entry is recorded only after the commit.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from decimal import Decimal

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from audit.application.recorder import AuditTrailRecorder
from audit.domain.entry import AuditAction
from infrastructure.settings import CheckoutSettings
from ordering.application.observability import (
    CartValidationProbe,
    DefaultOrderFulfillmentProbe,
    OrderFulfillmentProbe,
)
from ordering.application.services.cart_validator import CartValidator
from ordering.domain.aggregates import Order
from ordering.domain.events import OrderPlaced
from ordering.domain.value_objects import (
    ZERO,
    AddressType,
    CartErrorCode,
    CartLine,
    CartLineError,
    PostalAddress,
    RequestMetadata,
    ValidatedCart,
    round_money,
)
from ordering.ports.exceptions import (
    CartInvalid,
    InsufficientStock,
    InternalError,
    OrderingError,
    OrderNumberConflict,
    TransactionTimeout,
)
from ordering.ports.pricing import DiscountResolver, TaxRateLookup
from ordering.ports.repositories import CheckoutRepositories
from shared_kernel.tenancy import TenantContextError, tenant_scope

RepositoriesFactory = Callable[[AsyncSession], CheckoutRepositories]


@dataclass(frozen=True)
class CreateOrderInput:
    """Everything needed to place one order.

    ``billing_address`` defaults to the shipping address. ``shipping_cost``
    is the cost of the shipping option the shopper picked.
    """

    tenant_id: str
    lines: Sequence[CartLine]
    shipping_address: PostalAddress
    shipping_method: str
    shipping_cost: Decimal
    customer_id: str | None = None
    user_id: str | None = None
    billing_address: PostalAddress | None = None
    discount_code: str | None = None
    customer_note: str | None = None
    request_metadata: RequestMetadata = field(default_factory=RequestMetadata)

    def __post_init__(self) -> None:
        if self.shipping_cost < 0:
            raise ValueError("shipping_cost cannot be negative")


class _OrderNumberTaken(Exception):
    """Carries the sequence floor for the next attempt out of a rolled-back transaction."""

    def __init__(self, order_number: str, next_minimum: int):
        self.order_number = order_number
        self.next_minimum = next_minimum
        super().__init__(order_number)


class OrderFulfillmentService:
    """Application service for placing orders.

    Each attempt opens its own session from ``session_factory`` and builds
    its repositories with ``repositories_factory``, so a retried attempt
    never sees state left behind by a rolled-back one.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        repositories_factory: RepositoriesFactory,
        tax_rates: TaxRateLookup,
        audit: AuditTrailRecorder,
        settings: CheckoutSettings,
        discounts: DiscountResolver | None = None,
        probe: OrderFulfillmentProbe | None = None,
        validation_probe: CartValidationProbe | None = None,
    ):
        """Initialize OrderFulfillmentService with dependencies.

        Args:
            session_factory: Factory for write sessions, one per attempt
            repositories_factory: Builds the repositories bound to a session
            tax_rates: Tax lookup evaluated inside the transaction
            audit: Recorder for the post-commit audit entry
            settings: Order number, retry and timeout settings
            discounts: Discount resolver; None means no discounts apply
            probe: Optional domain probe for observability
            validation_probe: Optional probe handed to the cart validator
        """
        self._session_factory = session_factory
        self._repositories_factory = repositories_factory
        self._tax_rates = tax_rates
        self._audit = audit
        self._settings = settings
        self._discounts = discounts
        self._probe = probe or DefaultOrderFulfillmentProbe()
        self._validation_probe = validation_probe

    async def create_order(self, request: CreateOrderInput) -> Order:
        """Place an order for the cart in ``request``.

        Args:
            request: Cart, addresses and pricing inputs

        Returns:
            The committed Order aggregate

        Raises:
            CartInvalid: If any cart line was rejected
            InsufficientStock: If stock ran out at validation or at the decrement
            TenantContextMissing: If the tenant scope was lost
            InternalError: On timeout, any unexpected failure or exhausted order
                number attempts; carries a correlation id
        """
        with tenant_scope(request.tenant_id, actor_id=request.user_id):
            order = await self._place_with_retries(request)
            self._record_audit(order, request)

        self._probe.order_created(
            order_id=order.id.value,
            order_number=order.order_number,
            total_amount=str(order.total_amount),
            line_item_count=len(order.line_items),
        )
        return order

    async def _place_with_retries(self, request: CreateOrderInput) -> Order:
        attempts = self._settings.max_order_number_attempts
        timeout_seconds = self._settings.transaction_timeout_seconds
        minimum = 1

        for attempt in range(1, attempts + 1):
            try:
                async with asyncio.timeout(timeout_seconds):
                    return await self._place_order(request, minimum)
            except _OrderNumberTaken as e:
                self._probe.order_number_conflict(order_number=e.order_number, attempt=attempt)
                minimum = max(minimum + 1, e.next_minimum)
            except TimeoutError as e:
                error = TransactionTimeout()
                self._probe.transaction_timed_out(
                    timeout_seconds=timeout_seconds,
                    correlation_id=error.correlation_id,
                )
                raise error from e
            except SQLAlchemyError as e:
                error = InternalError()
                self._probe.transaction_failed(error=str(e), correlation_id=error.correlation_id)
                raise error from e
            except (OrderingError, TenantContextError):
                raise
            except Exception as e:
                error = InternalError()
                self._probe.transaction_failed(error=repr(e), correlation_id=error.correlation_id)
                raise error from e

        error = InternalError()
        self._probe.order_number_attempts_exhausted(
            attempts=attempts,
            correlation_id=error.correlation_id,
        )
        raise error

    async def _place_order(self, request: CreateOrderInput, minimum: int) -> Order:
        async with self._session_factory() as session, session.begin():
            repositories = self._repositories_factory(session)

            validator = CartValidator(repositories.catalog, probe=self._validation_probe)
            cart = await validator.validate(request.tenant_id, request.lines)
            self._ensure_valid(cart)

            subtotal = cart.subtotal
            tax_amount = self._tax_rates.quote_tax(request.shipping_address, subtotal)
            discount_amount = ZERO
            if self._discounts is not None:
                discount = self._discounts.resolve(request.discount_code, subtotal)
                discount_amount = min(max(round_money(discount), ZERO), subtotal)

            order_number = await repositories.order_numbers.next_order_number(minimum=minimum)

            shipping_address_id = await repositories.addresses.add(
                request.shipping_address,
                AddressType.SHIPPING,
            )
            billing_address_id = shipping_address_id
            if (
                request.billing_address is not None
                and request.billing_address != request.shipping_address
            ):
                billing_address_id = await repositories.addresses.add(
                    request.billing_address,
                    AddressType.BILLING,
                )

            order = Order.place(
                tenant_id=request.tenant_id,
                order_number=order_number,
                lines=cart.lines,
                subtotal=subtotal,
                tax_amount=tax_amount,
                shipping_amount=request.shipping_cost,
                discount_amount=discount_amount,
                shipping_address_id=shipping_address_id,
                billing_address_id=billing_address_id,
                shipping_method=request.shipping_method,
                customer_id=request.customer_id,
                user_id=request.user_id,
                discount_code=request.discount_code,
                customer_note=request.customer_note,
                ip_address=request.request_metadata.ip_address,
                user_agent=request.request_metadata.user_agent,
            )

            try:
                await repositories.orders.add(order)
            except OrderNumberConflict as e:
                taken = repositories.order_numbers.parse(e.order_number)
                next_minimum = (taken if taken is not None else minimum) + 1
                raise _OrderNumberTaken(e.order_number, next_minimum) from e

            for line in cart.lines:
                if not line.track_inventory:
                    continue
                decrement = await repositories.inventory.decrement(
                    product_id=line.product_id,
                    quantity=line.quantity,
                    variant_id=line.variant_id,
                    order_id=order.id.value,
                    user_id=request.user_id,
                )
                if decrement is None:
                    self._probe.stock_exhausted_at_commit(
                        product_id=line.product_id,
                        variant_id=line.variant_id,
                        quantity=line.quantity,
                    )
                    raise InsufficientStock(
                        [
                            CartLineError(
                                product_id=line.product_id,
                                variant_id=line.variant_id,
                                code=CartErrorCode.INSUFFICIENT_STOCK,
                                message=f"Insufficient stock for {line.product_name}",
                            )
                        ]
                    )

        return order

    def _ensure_valid(self, cart: ValidatedCart) -> None:
        if cart.is_valid:
            return

        self._probe.cart_rejected(
            error_count=len(cart.errors),
            stock_shortage=cart.is_stock_shortage,
        )
        if cart.is_stock_shortage:
            raise InsufficientStock(cart.errors)
        if not cart.errors:
            raise CartInvalid((), message="Cart is empty")
        raise CartInvalid(cart.errors)

    def _record_audit(self, order: Order, request: CreateOrderInput) -> None:
        for event in order.collect_events():
            if not isinstance(event, OrderPlaced):
                continue
            self._audit.record(
                entity_type="Order",
                entity_id=event.order_id,
                action=AuditAction.CREATE,
                tenant_id=event.tenant_id,
                actor_id=event.actor_id,
                changes={
                    "order_number": event.order_number,
                    "total_amount": str(event.total_amount),
                    "item_count": event.item_count,
                    "status": order.status.value,
                },
                ip_address=request.request_metadata.ip_address,
                user_agent=request.request_metadata.user_agent,
            )
