"""
Stock ledger — state-changing operations (adjust, thresholds, recalculate).

All methods use transaction.atomic() with appropriate locking.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from django.db import transaction
from django.utils import timezone

from stockkeeper.concurrency import conflict_guard
from stockkeeper.conf import stockkeeper_settings
from stockkeeper.exceptions import StockError
from stockkeeper.models.account import StockAccount
from stockkeeper.models.catalog import Product
from stockkeeper.models.enums import MovementType, ReferenceType
from stockkeeper.models.movement import StockMovement

logger = logging.getLogger('stockkeeper')

# Sign applied to the magnitude of directional movement types
DIRECTIONS = {
    MovementType.IN: 1,
    MovementType.OUT: -1,
    MovementType.TRANSFER: -1,
}

THRESHOLD_FIELDS = ('minimum_stock', 'maximum_stock', 'reorder_point', 'reserved_stock')


@dataclass(frozen=True)
class AdjustmentResult:
    """Outcome of StockLedger.adjust()."""

    previous_stock: int
    new_stock: int
    account: StockAccount
    movement: StockMovement

    @property
    def delta(self) -> int:
        return self.new_stock - self.previous_stock


@dataclass(frozen=True)
class LedgerCheck:
    """Counter vs. replayed ledger for one product."""

    product: Product
    recorded: int
    replayed: int

    @property
    def is_consistent(self) -> bool:
        return self.recorded == self.replayed

    @property
    def difference(self) -> int:
        return self.replayed - self.recorded


def as_movement_type(value) -> MovementType:
    """Coerce a MovementType or its string value."""
    try:
        return MovementType(value)
    except ValueError:
        raise StockError('INVALID_MOVEMENT_TYPE', movement_type=value) from None


def as_reference_type(value) -> ReferenceType:
    """Coerce a ReferenceType or its string value."""
    try:
        return ReferenceType(value)
    except ValueError:
        raise StockError('INVALID_REFERENCE_TYPE', reference_type=value) from None


def movement_delta(kind, quantity) -> int:
    """
    Signed effect of a movement on current stock.

    IN/OUT/TRANSFER take an unsigned magnitude (must be > 0).
    ADJUST takes a signed delta (must be non-zero).

    Raises:
        StockError('INVALID_MOVEMENT_TYPE'): Unknown type
        StockError('INVALID_QUANTITY'): Wrong sign, zero, or not an int
    """
    kind = as_movement_type(kind)

    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise StockError('INVALID_QUANTITY', requested=quantity, movement_type=kind.value)

    if kind == MovementType.ADJUST:
        if quantity == 0:
            raise StockError('INVALID_QUANTITY', requested=quantity, movement_type=kind.value)
        return quantity

    if quantity <= 0:
        raise StockError('INVALID_QUANTITY', requested=quantity, movement_type=kind.value)
    return DIRECTIONS[kind] * quantity


def _unit_cost(value) -> Decimal | None:
    if value is None:
        return None
    try:
        cost = Decimal(str(value))
    except InvalidOperation:
        raise StockError('INVALID_ARGUMENT', unit_cost=value) from None
    if not cost.is_finite() or cost < 0:
        raise StockError('INVALID_ARGUMENT', unit_cost=value)
    # Must fit the column: at most max_digits digits, decimal_places of them fractional
    field = StockMovement._meta.get_field('unit_cost')
    if cost >= Decimal(10) ** (field.max_digits - field.decimal_places):
        raise StockError('INVALID_ARGUMENT', unit_cost=value)
    quantized = cost.quantize(Decimal(10) ** -field.decimal_places)
    if quantized != cost:
        raise StockError('INVALID_ARGUMENT', unit_cost=value)
    return quantized


def _reference_id(value) -> str:
    if value is None:
        return ''
    value = str(value)
    if len(value) > StockMovement._meta.get_field('reference_id').max_length:
        raise StockError('INVALID_ARGUMENT', reference_id=value)
    return value


def _stockable_product(product) -> Product:
    """Re-read the product; it must exist, be active and not soft-deleted."""
    pk = product.pk if isinstance(product, Product) else product
    found = Product.objects.stockable().filter(pk=pk).first()
    if found is None:
        raise StockError('PRODUCT_NOT_FOUND', product_id=pk)
    return found


class StockLedger:
    """State-changing stock ledger methods."""

    @classmethod
    @conflict_guard(StockError)
    def adjust(cls, product, quantity: int, movement_type,
               unit_cost=None, reference_type=ReferenceType.ADJUSTMENT,
               reference_id=None, notes: str = '', user=None) -> AdjustmentResult:
        """
        Apply one stock movement.

        | type     | effect            |
        |----------|-------------------|
        | IN       | += quantity       |
        | OUT      | -= quantity       |
        | ADJUST   | += quantity (signed) |
        | TRANSFER | -= quantity       |

        Creates the account (thresholds at zero) when the product has none.

        Raises:
            StockError('PRODUCT_NOT_FOUND'): Product missing, inactive or deleted
            StockError('INSUFFICIENT_STOCK'): Result would be negative
            StockError('INVALID_MOVEMENT_TYPE' | 'INVALID_QUANTITY' |
                       'INVALID_REFERENCE_TYPE' |
                       'INVALID_ARGUMENT'): Bad arguments

        Concurrency:
            - Runs under transaction.atomic()
            - Uses select_for_update() on the account
            - Validates the new stock after the lock
            - StockMovement.save() updates current_stock atomically
        """
        kind = as_movement_type(movement_type)
        ref_type = as_reference_type(reference_type or ReferenceType.ADJUSTMENT)
        delta = movement_delta(kind, quantity)
        cost = _unit_cost(unit_cost)
        ref_id = _reference_id(reference_id)

        with transaction.atomic():
            product = _stockable_product(product)
            account = cls._locked_account(product)

            previous = account.current_stock
            new_stock = previous + delta

            if new_stock < 0:
                logger.info(
                    "stock.adjust.rejected",
                    extra={
                        "product_id": product.pk,
                        "movement_type": kind.value,
                        "current": previous,
                        "requested": abs(delta),
                    },
                )
                raise StockError(
                    'INSUFFICIENT_STOCK',
                    product_id=product.pk,
                    movement_type=kind.value,
                    current=previous,
                    requested=abs(delta),
                )

            movement = StockMovement.objects.create(
                product=product,
                movement_type=kind,
                quantity=abs(delta),
                delta=delta,
                unit_cost=cost,
                reference_type=ref_type,
                reference_id=ref_id,
                notes=notes or '',
                actor=user,
                created_at=timezone.now(),
            )

            account.refresh_from_db()
            logger.info(
                "stock.adjust",
                extra={
                    "product_id": product.pk,
                    "movement_id": movement.pk,
                    "movement_type": kind.value,
                    "delta": delta,
                    "previous": previous,
                    "new": account.current_stock,
                    "reference_type": ref_type.value,
                },
            )
            return AdjustmentResult(
                previous_stock=previous,
                new_stock=account.current_stock,
                account=account,
                movement=movement,
            )

    @classmethod
    def receive(cls, product, quantity: int, reference_type=ReferenceType.PURCHASE,
                **kwargs) -> AdjustmentResult:
        """Stock entry (IN)."""
        return cls.adjust(product, quantity, MovementType.IN,
                          reference_type=reference_type, **kwargs)

    @classmethod
    def issue(cls, product, quantity: int, reference_type=ReferenceType.ORDER,
              **kwargs) -> AdjustmentResult:
        """Stock exit (OUT)."""
        return cls.adjust(product, quantity, MovementType.OUT,
                          reference_type=reference_type, **kwargs)

    @classmethod
    def set_initial_stock(cls, product, quantity: int, unit_cost=None,
                          user=None) -> AdjustmentResult | None:
        """
        Opening stock for a freshly created product.

        Records an IN/INITIAL movement; with quantity 0 only the account
        is opened and None is returned.
        """
        if quantity == 0:
            cls.open_account(product)
            return None
        return cls.adjust(
            product, quantity, MovementType.IN,
            unit_cost=unit_cost,
            reference_type=ReferenceType.INITIAL,
            notes='Initial stock',
            user=user,
        )

    @classmethod
    def open_account(cls, product) -> StockAccount:
        """Get or create the product's account without changing stock."""
        product = _stockable_product(product)
        account, _ = StockAccount.objects.get_or_create(
            product=product,
            defaults={'warehouse_location': stockkeeper_settings.DEFAULT_WAREHOUSE},
        )
        return account

    @classmethod
    @conflict_guard(StockError)
    def update_thresholds(cls, product, minimum_stock: int | None = None,
                          maximum_stock: int | None = None,
                          reorder_point: int | None = None,
                          reserved_stock: int | None = None,
                          warehouse_location: str | None = None) -> StockAccount:
        """
        Update stock settings.

        Only arguments that are not None are written. Never touches
        current_stock or last_stock_check_at and never records a movement.
        Creates the account (current_stock=0) when absent.

        Raises:
            StockError('INVALID_THRESHOLDS'): Negative value, or (with
                STRICT_THRESHOLDS) max < min or reorder point > max
        """
        changes = {
            'minimum_stock': minimum_stock,
            'maximum_stock': maximum_stock,
            'reorder_point': reorder_point,
            'reserved_stock': reserved_stock,
            'warehouse_location': warehouse_location,
        }
        changes = {k: v for k, v in changes.items() if v is not None}

        for field in THRESHOLD_FIELDS:
            value = changes.get(field)
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise StockError('INVALID_THRESHOLDS', field=field, value=value)

        with transaction.atomic():
            product = _stockable_product(product)
            account = cls._locked_account(product)

            for field, value in changes.items():
                setattr(account, field, value)

            if stockkeeper_settings.STRICT_THRESHOLDS:
                cls._check_threshold_order(account)

            account.save(update_fields=[*changes, 'updated_at'])
            logger.info(
                "stock.thresholds",
                extra={
                    "product_id": product.pk,
                    "changes": {k: str(v) for k, v in changes.items()},
                },
            )
            return account

    @classmethod
    def verify(cls, product) -> LedgerCheck:
        """Compare the stored counter with the replayed movement ledger."""
        pk = product.pk if isinstance(product, Product) else product
        product = Product.objects.filter(pk=pk).first()
        if product is None:
            raise StockError('PRODUCT_NOT_FOUND', product_id=pk)

        account = StockAccount.objects.filter(product=product).first()
        if account is None:
            # Unsaved account: replayed_stock() only needs product_id
            replayed = StockAccount(product=product).replayed_stock()
            return LedgerCheck(product=product, recorded=0, replayed=replayed)

        return LedgerCheck(
            product=product,
            recorded=account.current_stock,
            replayed=account.replayed_stock(),
        )

    @classmethod
    @conflict_guard(StockError)
    def recalculate(cls, product) -> StockAccount:
        """
        Rewrite current_stock from the movement ledger, under lock.

        Raises:
            StockError('ACCOUNT_NOT_FOUND'): Product has no account
        """
        pk = product.pk if isinstance(product, Product) else product

        with transaction.atomic():
            account = StockAccount.objects.select_for_update().filter(product_id=pk).first()
            if account is None:
                raise StockError('ACCOUNT_NOT_FOUND', product_id=pk)
            account.recalculate()
            return account

    # ══════════════════════════════════════════════════════════════
    # INTERNALS
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def _locked_account(cls, product: Product) -> StockAccount:
        """Get or create the account, then lock its row. Call inside atomic()."""
        account, created = StockAccount.objects.get_or_create(
            product=product,
            defaults={'warehouse_location': stockkeeper_settings.DEFAULT_WAREHOUSE},
        )
        if created:
            logger.debug("stock.account.opened", extra={"product_id": product.pk})
        return StockAccount.objects.select_for_update().get(pk=account.pk)

    @classmethod
    def _check_threshold_order(cls, account: StockAccount) -> None:
        maximum = account.maximum_stock
        if maximum is None:
            return
        if maximum < account.minimum_stock or account.reorder_point > maximum:
            raise StockError(
                'INVALID_THRESHOLDS',
                minimum_stock=account.minimum_stock,
                maximum_stock=maximum,
                reorder_point=account.reorder_point,
            )
