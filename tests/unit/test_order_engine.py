"""
Unit tests for OrderEngine.
Testing submission, cancellation, matching, expiration and validation.
"""

import pytest

from src.core.enums import OrderSide, OrderStatus, OrderType
from src.core.exceptions.simulation import ConfigurationError, OrderError
from src.core.models.holdings import Lot, PortfolioState
from src.core.models.order import OrderRequest
from src.core.orders.order_engine import OrderEngine, create_order_engine

RICH = PortfolioState(cash=10000.0)


def market_buy(
    ticker: str = "BURG", quantity: float = 10, expires_in_turns: int | None = None
) -> OrderRequest:
    return OrderRequest(
        OrderType.MARKET, OrderSide.BUY, ticker, quantity, expires_in_turns=expires_in_turns
    )


@pytest.fixture
def engine() -> OrderEngine:
    return OrderEngine()


class TestOrderSubmission:
    """Test order submission and lookup."""

    def test_should_queue_pending_order(self, engine: OrderEngine) -> None:
        """Test submission assigns an ID and default expiration."""
        # Act
        result = engine.submit_order(market_buy(), current_turn=3)

        # Assert
        assert result.success
        order = result.order
        assert order is not None
        assert order.id.startswith("ORD-")
        assert order.status == OrderStatus.PENDING
        assert order.placed_at == 3
        assert order.expires_at == 5
        assert engine.get_pending_orders() == [order]
        assert engine.get_order(order.id) == order

    def test_should_honor_requested_expiration(self, engine: OrderEngine) -> None:
        """Test expires_in_turns overrides the default."""
        result = engine.submit_order(market_buy(expires_in_turns=10), current_turn=1)

        assert result.order is not None
        assert result.order.expires_at == 11

    def test_should_use_factory_expiration(self) -> None:
        """Test factory default expiration settings."""
        assert create_order_engine().default_expiration_turns == 2
        assert create_order_engine(4).default_expiration_turns == 4

    def test_should_reject_non_positive_default_expiration(self) -> None:
        """Test invalid configuration fails at construction."""
        with pytest.raises(ConfigurationError):
            OrderEngine(default_expiration_turns=0)

    def test_should_reject_negative_expiration(self, engine: OrderEngine) -> None:
        """Test an order cannot be queued already expired in the past."""
        with pytest.raises(OrderError):
            engine.submit_order(market_buy(expires_in_turns=-1), current_turn=3)

        assert engine.get_pending_orders() == []

    def test_should_return_none_for_unknown_order(self, engine: OrderEngine) -> None:
        """Test lookup of an unknown ID."""
        assert engine.get_order("ORD-missing") is None


class TestOrderCancellation:
    """Test order cancellation."""

    def test_should_cancel_pending_order(self, engine: OrderEngine) -> None:
        """Test cancellation archives the order."""
        # Arrange
        order = engine.submit_order(market_buy(), 0).order
        assert order is not None

        # Act
        cancelled = engine.cancel_order(order.id)

        # Assert
        assert cancelled
        assert engine.get_pending_orders() == []
        history = engine.get_order_history()
        assert [o.status for o in history] == [OrderStatus.CANCELLED]
        archived = engine.get_order(order.id)
        assert archived is not None
        assert archived.status == OrderStatus.CANCELLED

    def test_should_not_cancel_twice(self, engine: OrderEngine) -> None:
        """Test cancelling an archived or unknown order returns False."""
        order = engine.submit_order(market_buy(), 0).order
        assert order is not None
        engine.cancel_order(order.id)

        assert not engine.cancel_order(order.id)
        assert not engine.cancel_order("ORD-missing")
        assert len(engine.get_order_history()) == 1


class TestMarketOrderExecution:
    """Test market order fills."""

    def test_should_fill_market_buy_at_current_price(self, engine: OrderEngine) -> None:
        """Test a market buy fills at the price with the fee attached."""
        # Arrange
        order = engine.submit_order(market_buy(quantity=10), 0).order
        assert order is not None

        # Act
        report = engine.process_end_of_turn({"BURG": 25.0}, RICH, 1, fee=1.0)

        # Assert
        assert report.turn == 1
        assert len(report.fills) == 1
        assert report.fills[0].price == 25.0
        trade = report.trades[0]
        assert trade.order_id == order.id
        assert trade.total_value == 250.0
        assert trade.fee == 1.0
        assert trade.executed_at == 1
        assert report.pending == ()
        filled = engine.get_order(order.id)
        assert filled is not None
        assert filled.status == OrderStatus.FILLED
        assert filled.filled_quantity == 10
        assert filled.fill_price == 25.0
        assert filled.filled_at == 1

    def test_should_keep_order_pending_without_price(self, engine: OrderEngine) -> None:
        """Test an unpriced ticker leaves the order pending."""
        engine.submit_order(market_buy(ticker="NOPE"), 0)

        report = engine.process_end_of_turn({"BURG": 25.0}, RICH, 1)

        assert report.fills == ()
        assert len(report.pending) == 1

    def test_should_wait_for_funds(self, engine: OrderEngine) -> None:
        """Test a buy the portfolio cannot afford stays pending."""
        engine.submit_order(market_buy(quantity=10), 0)
        poor = PortfolioState(cash=250.0)

        report = engine.process_end_of_turn({"BURG": 25.0}, poor, 1, fee=1.0)

        assert report.fills == ()
        assert len(report.pending) == 1

    def test_should_wait_for_shares(self, engine: OrderEngine) -> None:
        """Test a sell of unheld shares stays pending."""
        engine.submit_order(OrderRequest(OrderType.MARKET, OrderSide.SELL, "BURG", 5), 0)
        holder = PortfolioState(cash=0.0, lots=(Lot("BURG", 4, 20.0, 0),))

        report = engine.process_end_of_turn({"BURG": 25.0}, holder, 1)

        assert report.fills == ()

    def test_should_never_fill_non_positive_quantity(self, engine: OrderEngine) -> None:
        """Test zero-quantity orders never execute."""
        engine.submit_order(market_buy(quantity=0), 0)

        report = engine.process_end_of_turn({"BURG": 25.0}, RICH, 1)

        assert report.trades == ()
        assert len(report.pending) == 1


class TestSameTurnContention:
    """Test orders matched in one pass share the portfolio's cash and shares."""

    def test_should_fill_only_first_of_two_individually_affordable_buys(
        self, engine: OrderEngine
    ) -> None:
        """Test two buys of $6,001 each against $10,000 fill once."""
        # Arrange
        first = engine.submit_order(market_buy(quantity=240), 0).order
        second = engine.submit_order(market_buy(quantity=240), 0).order
        assert first is not None and second is not None

        # Act
        report = engine.process_end_of_turn({"BURG": 25.0}, RICH, 1, fee=1.0)

        # Assert
        assert [fill.order.id for fill in report.fills] == [first.id]
        assert [order.id for order in report.pending] == [second.id]
        spent = sum(trade.total_value + trade.fee for trade in report.trades)
        assert RICH.cash - spent >= 0

    def test_should_fill_only_one_sell_of_the_same_shares(self, engine: OrderEngine) -> None:
        """Test two sells of all 10 held shares fill once."""
        # Arrange
        holder = PortfolioState(cash=0.0, lots=(Lot("BURG", 10, 20.0, 0),))
        first = engine.submit_order(OrderRequest(OrderType.MARKET, OrderSide.SELL, "BURG", 10), 0)
        second = engine.submit_order(OrderRequest(OrderType.MARKET, OrderSide.SELL, "BURG", 10), 0)
        assert first.order is not None and second.order is not None

        # Act
        report = engine.process_end_of_turn({"BURG": 25.0}, holder, 1)

        # Assert
        assert [trade.order_id for trade in report.trades] == [first.order.id]
        assert [order.id for order in report.pending] == [second.order.id]

    def test_should_not_fund_buy_with_same_pass_sale(self, engine: OrderEngine) -> None:
        """Test sale proceeds are only spendable on a later turn."""
        holder = PortfolioState(cash=0.0, lots=(Lot("BURG", 10, 20.0, 0),))
        engine.submit_order(OrderRequest(OrderType.MARKET, OrderSide.SELL, "BURG", 10), 0)
        engine.submit_order(market_buy(quantity=5), 0)

        report = engine.process_end_of_turn({"BURG": 25.0}, holder, 1, fee=1.0)

        assert [trade.side for trade in report.trades] == [OrderSide.SELL]
        assert len(report.pending) == 1

    def test_should_fill_buys_that_fit_together(self, engine: OrderEngine) -> None:
        """Test $251 and $501 buys both fill from $1,000."""
        engine.submit_order(market_buy(quantity=10), 0)
        engine.submit_order(market_buy(ticker="ZAP", quantity=10), 0)

        report = engine.process_end_of_turn(
            {"BURG": 25.0, "ZAP": 50.0}, PortfolioState(cash=1000.0), 1, fee=1.0
        )

        assert len(report.fills) == 2
        assert report.pending == ()


class TestLimitOrderExecution:
    """Test limit order matching and fill price."""

    def test_should_fill_buy_limit_at_better_price(self, engine: OrderEngine) -> None:
        """Test a buy limit at 30 with the price at 25 fills at 25."""
        engine.submit_order(
            OrderRequest(OrderType.LIMIT, OrderSide.BUY, "BURG", 1, limit_price=30.0), 0
        )

        report = engine.process_end_of_turn({"BURG": 25.0}, RICH, 1)

        assert report.fills[0].price == 25.0

    def test_should_hold_buy_limit_above_price(self, engine: OrderEngine) -> None:
        """Test a buy limit below the price does not fill."""
        engine.submit_order(
            OrderRequest(OrderType.LIMIT, OrderSide.BUY, "BURG", 1, limit_price=20.0), 0
        )

        report = engine.process_end_of_turn({"BURG": 25.0}, RICH, 1)

        assert report.fills == ()
        assert len(report.pending) == 1

    def test_should_fill_sell_limit_at_or_above_limit(self, engine: OrderEngine) -> None:
        """Test a sell limit fills at the higher of price and limit."""
        # Arrange
        holder = PortfolioState(cash=0.0, lots=(Lot("BURG", 5, 20.0, 0),))
        engine.submit_order(
            OrderRequest(OrderType.LIMIT, OrderSide.SELL, "BURG", 5, limit_price=24.0), 0
        )

        # Act
        report = engine.process_end_of_turn({"BURG": 25.0}, holder, 1)

        # Assert
        assert report.fills[0].price == 25.0
        assert report.trades[0].side == OrderSide.SELL

    def test_should_hold_sell_limit_below_limit(self, engine: OrderEngine) -> None:
        """Test a sell limit above the price waits."""
        holder = PortfolioState(cash=0.0, lots=(Lot("BURG", 5, 20.0, 0),))
        engine.submit_order(
            OrderRequest(OrderType.LIMIT, OrderSide.SELL, "BURG", 5, limit_price=30.0), 0
        )

        report = engine.process_end_of_turn({"BURG": 25.0}, holder, 1)

        assert report.fills == ()


class TestStopOrderExecution:
    """Test stop and stop-limit trigger conditions."""

    def test_should_trigger_buy_stop_at_or_above_stop(self, engine: OrderEngine) -> None:
        """Test a buy stop fills once the price reaches the stop."""
        engine.submit_order(
            OrderRequest(OrderType.STOP, OrderSide.BUY, "BURG", 1, stop_price=25.0), 0
        )

        report = engine.process_end_of_turn({"BURG": 25.0}, RICH, 1)

        assert report.fills[0].price == 25.0

    def test_should_trigger_sell_stop_at_or_below_stop(self, engine: OrderEngine) -> None:
        """Test a sell stop waits above the stop and fills below it."""
        # Arrange
        holder = PortfolioState(cash=0.0, lots=(Lot("BURG", 5, 20.0, 0),))
        engine.submit_order(
            OrderRequest(
                OrderType.STOP, OrderSide.SELL, "BURG", 5, stop_price=18.0, expires_in_turns=5
            ),
            0,
        )

        # Act
        waiting = engine.process_end_of_turn({"BURG": 19.0}, holder, 1)
        triggered = engine.process_end_of_turn({"BURG": 17.5}, holder, 2)

        # Assert
        assert waiting.fills == ()
        assert triggered.fills[0].price == 17.5

    def test_should_treat_stop_limit_like_stop(self, engine: OrderEngine) -> None:
        """Test stop-limit fills at market once the stop triggers."""
        engine.submit_order(
            OrderRequest(
                OrderType.STOP_LIMIT,
                OrderSide.BUY,
                "BURG",
                1,
                limit_price=26.0,
                stop_price=25.0,
            ),
            0,
        )

        report = engine.process_end_of_turn({"BURG": 27.0}, RICH, 1)

        assert report.fills[0].price == 27.0


class TestOrderExpiration:
    """Test expiration ordering."""

    def test_should_expire_before_filling(self, engine: OrderEngine) -> None:
        """Test an order at its expiry turn expires even if it could fill."""
        # Arrange
        order = engine.submit_order(market_buy(expires_in_turns=1), 0).order
        assert order is not None

        # Act
        report = engine.process_end_of_turn({"BURG": 25.0}, RICH, 1)

        # Assert
        assert report.fills == ()
        assert [o.id for o in report.expired] == [order.id]
        assert report.expired[0].status == OrderStatus.EXPIRED
        assert engine.get_pending_orders() == []

    def test_should_stay_pending_until_expiry(self, engine: OrderEngine) -> None:
        """Test an unfillable order lives until its expiry turn."""
        engine.submit_order(market_buy(ticker="NOPE"), 0)

        first = engine.process_end_of_turn({}, RICH, 1)
        second = engine.process_end_of_turn({}, RICH, 2)

        assert len(first.pending) == 1
        assert len(second.expired) == 1
        assert engine.get_order_history()[0].status == OrderStatus.EXPIRED

    def test_should_clear_all_orders(self, engine: OrderEngine) -> None:
        """Test clear drops pending orders and history."""
        order = engine.submit_order(market_buy(), 0).order
        engine.submit_order(market_buy(), 0)
        assert order is not None
        engine.cancel_order(order.id)

        engine.clear()

        assert engine.get_pending_orders() == []
        assert engine.get_order_history() == []


class TestOrderValidation:
    """Test advisory order validation."""

    def test_should_accept_affordable_market_buy(self, engine: OrderEngine) -> None:
        """Test a valid request has no errors."""
        result = engine.validate_order(market_buy(quantity=10), RICH, {"BURG": 25.0})

        assert result.valid
        assert result.errors == ()

    def test_should_reject_non_positive_quantity(self, engine: OrderEngine) -> None:
        """Test quantity must be positive."""
        result = engine.validate_order(market_buy(quantity=0), RICH, {"BURG": 25.0})

        assert not result.valid
        assert "Quantity must be positive" in result.errors

    def test_should_reject_unknown_ticker(self, engine: OrderEngine) -> None:
        """Test tickers must be priced when any prices are known."""
        result = engine.validate_order(market_buy(ticker="NOPE"), RICH, {"BURG": 25.0})

        assert "Unknown ticker: NOPE" in result.errors

    def test_should_skip_ticker_check_without_prices(self, engine: OrderEngine) -> None:
        """Test an empty price map does not flag unknown tickers."""
        result = engine.validate_order(market_buy(ticker="NOPE"), RICH, {})

        assert result.valid

    def test_should_reject_unaffordable_buy_including_fee(self, engine: OrderEngine) -> None:
        """Test cost plus fee must fit in cash."""
        poor = PortfolioState(cash=250.0)

        result = engine.validate_order(market_buy(quantity=10), poor, {"BURG": 25.0}, fee=1.0)

        assert not result.valid
        assert result.errors == ("Insufficient cash. Need $251.00, have $250.00",)

    def test_should_fall_back_to_limit_price_for_cost(self, engine: OrderEngine) -> None:
        """Test the limit price is used when no market price is known."""
        request = OrderRequest(OrderType.LIMIT, OrderSide.BUY, "NEW", 10, limit_price=100.0)

        result = engine.validate_order(request, PortfolioState(cash=500.0), {})

        assert not result.valid
        assert result.errors[0].startswith("Insufficient cash")

    def test_should_reject_selling_unheld_shares(self, engine: OrderEngine) -> None:
        """Test sells need enough shares."""
        request = OrderRequest(OrderType.MARKET, OrderSide.SELL, "BURG", 5)
        holder = PortfolioState(cash=0.0, lots=(Lot("BURG", 3, 20.0, 0),))

        result = engine.validate_order(request, holder, {"BURG": 25.0})

        assert result.errors == ("Insufficient shares. Want to sell 5, have 3",)

    def test_should_require_type_specific_prices(self, engine: OrderEngine) -> None:
        """Test limit and stop prices are mandatory for their types."""
        limit = OrderRequest(OrderType.LIMIT, OrderSide.BUY, "BURG", 1)
        stop = OrderRequest(OrderType.STOP, OrderSide.BUY, "BURG", 1)

        limit_result = engine.validate_order(limit, RICH, {"BURG": 25.0})
        stop_result = engine.validate_order(stop, RICH, {"BURG": 25.0})

        assert "Limit orders require a limit price" in limit_result.errors
        assert "Stop orders require a stop price" in stop_result.errors

    def test_should_warn_without_invalidating(self, engine: OrderEngine) -> None:
        """Test marketable limits and stop-limits only produce warnings."""
        marketable = OrderRequest(OrderType.LIMIT, OrderSide.BUY, "BURG", 1, limit_price=30.0)
        stop_limit = OrderRequest(
            OrderType.STOP_LIMIT, OrderSide.BUY, "BURG", 1, limit_price=30.0, stop_price=26.0
        )

        marketable_result = engine.validate_order(marketable, RICH, {"BURG": 25.0})
        stop_limit_result = engine.validate_order(stop_limit, RICH, {"BURG": 25.0})

        assert marketable_result.valid
        assert len(marketable_result.warnings) == 1
        assert "fill right away" in marketable_result.warnings[0]
        assert stop_limit_result.valid
        assert len(stop_limit_result.warnings) == 1
