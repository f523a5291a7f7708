"""Helper classes for OrderEngine to keep matching rules in one place."""

from collections.abc import Mapping
from dataclasses import replace

from src.core.enums import OrderSide, OrderType
from src.core.models.holdings import PortfolioState
from src.core.models.order import Order, OrderRequest, OrderValidationResult
from src.core.portfolio.lot_tracker import get_shares_for_ticker, sell_lots_fifo
from src.core.types.financial import calculate_notional_value


class ExecutionRules:
    """Decides whether and at what price a pending order fills."""

    @staticmethod
    def has_resources(order: Order, price: float, portfolio: PortfolioState, fee: float) -> bool:
        """Check funds for a buy or shares for a sell at the given price."""
        if order.quantity <= 0:
            return False

        if order.side.is_buy:
            return order.quantity * price + fee <= portfolio.cash

        return order.quantity <= get_shares_for_ticker(portfolio.lots, order.ticker)

    @staticmethod
    def is_triggered(order: Order, price: float) -> bool:
        """Check the order type's price condition.

        - MARKET: always
        - LIMIT: buy at or below the limit, sell at or above it
        - STOP / STOP_LIMIT: buy at or above the stop, sell at or below it
        """
        match order.type:
            case OrderType.MARKET:
                return True
            case OrderType.LIMIT:
                if order.limit_price is None:
                    return False
                if order.side == OrderSide.BUY:
                    return price <= order.limit_price
                return price >= order.limit_price
            case OrderType.STOP | OrderType.STOP_LIMIT:
                # TODO: give STOP_LIMIT its own limit check once limit_price is
                # honoured after the stop triggers; it currently fills like STOP.
                if order.stop_price is None:
                    return False
                if order.side == OrderSide.BUY:
                    return price >= order.stop_price
                return price <= order.stop_price

    @staticmethod
    def can_execute(order: Order, price: float, portfolio: PortfolioState, fee: float) -> bool:
        """Check both resources and trigger condition."""
        return ExecutionRules.has_resources(
            order, price, portfolio, fee
        ) and ExecutionRules.is_triggered(order, price)

    @staticmethod
    def reserve(
        order: Order, fill_price: float, portfolio: PortfolioState, fee: float
    ) -> PortfolioState:
        """Return the portfolio left over once a fill is committed.

        Buys spend cash, sells give up shares. Sale proceeds are not added, so
        a sell never funds a buy matched in the same pass.
        """
        if order.side.is_buy:
            cost = calculate_notional_value(order.quantity, fill_price) + fee
            return replace(portfolio, cash=portfolio.cash - cost)

        result = sell_lots_fifo(portfolio.lots, order.ticker, order.quantity, fill_price)
        return replace(portfolio, lots=result.lots)

    @staticmethod
    def get_fill_price(order: Order, price: float) -> float:
        """Fill price: limit orders get the better of price and limit."""
        if order.type == OrderType.LIMIT and order.limit_price is not None:
            if order.side == OrderSide.BUY:
                return min(price, order.limit_price)
            return max(price, order.limit_price)

        return price


class OrderValidator:
    """Advisory validation of order requests."""

    @staticmethod
    def validate(
        request: OrderRequest,
        portfolio: PortfolioState,
        prices: Mapping[str, float],
        fee: float,
    ) -> OrderValidationResult:
        """Validate a request against portfolio and prices.

        Args:
            request: Order request
            portfolio: Current portfolio snapshot
            prices: Current prices
            fee: Fee a fill would cost

        Returns:
            Result listing every error and warning found
        """
        errors: list[str] = []
        warnings: list[str] = []
        market_price = prices.get(request.ticker)

        if request.quantity <= 0:
            errors.append("Quantity must be positive")

        if prices and market_price is None:
            errors.append(f"Unknown ticker: {request.ticker}")

        if request.side == OrderSide.BUY:
            OrderValidator._check_cash(request, portfolio, market_price, fee, errors)
        else:
            OrderValidator._check_shares(request, portfolio, errors)

        if request.type.requires_limit_price and request.limit_price is None:
            errors.append("Limit orders require a limit price")

        if request.type.requires_stop_price and request.stop_price is None:
            errors.append("Stop orders require a stop price")

        OrderValidator._collect_warnings(request, market_price, warnings)

        return OrderValidationResult(
            valid=not errors, errors=tuple(errors), warnings=tuple(warnings)
        )

    @staticmethod
    def _check_cash(
        request: OrderRequest,
        portfolio: PortfolioState,
        market_price: float | None,
        fee: float,
        errors: list[str],
    ) -> None:
        """Estimate buy cost at market price, falling back to the limit price."""
        if market_price is not None:
            price = market_price
        elif request.limit_price is not None:
            price = request.limit_price
        else:
            price = 0.0

        estimated_cost = request.quantity * price + fee
        if estimated_cost > portfolio.cash:
            errors.append(
                f"Insufficient cash. Need ${estimated_cost:.2f}, have ${portfolio.cash:.2f}"
            )

    @staticmethod
    def _check_shares(request: OrderRequest, portfolio: PortfolioState, errors: list[str]) -> None:
        shares = get_shares_for_ticker(portfolio.lots, request.ticker)
        if request.quantity > shares:
            errors.append(
                f"Insufficient shares. Want to sell {request.quantity:g}, have {shares:g}"
            )

    @staticmethod
    def _collect_warnings(
        request: OrderRequest, market_price: float | None, warnings: list[str]
    ) -> None:
        """Warnings never make an order invalid."""
        if request.type == OrderType.STOP_LIMIT:
            warnings.append("Stop-limit orders currently fill like stop orders at market price")

        if market_price is None or request.limit_price is None:
            return

        if request.type == OrderType.LIMIT:
            if request.side == OrderSide.BUY and request.limit_price >= market_price:
                warnings.append(
                    f"Limit ${request.limit_price:.2f} is at or above the market price "
                    f"${market_price:.2f}; the order will fill right away"
                )
            elif request.side == OrderSide.SELL and request.limit_price <= market_price:
                warnings.append(
                    f"Limit ${request.limit_price:.2f} is at or below the market price "
                    f"${market_price:.2f}; the order will fill right away"
                )
