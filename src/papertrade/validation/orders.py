"""Pydantic models for trade request validation"""

from datetime import date
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from papertrade.domain.models import (
    Equity,
    Instrument,
    OptionContractSpec,
    OptionType,
    OrderAction,
    OrderType,
)
from papertrade.shared.exceptions import InvalidInstrument


class TradeRequest(BaseModel):
    """Request model for placing a paper trade"""

    account_id: str = Field("default", min_length=1, description="Account ID")
    symbol: str = Field(..., min_length=1, description="Underlying symbol")
    action: OrderAction = Field(..., description="BUY or SELL")
    quantity: int = Field(..., gt=0, description="Shares or contracts")
    order_type: OrderType = Field(OrderType.MARKET, description="Order type")
    limit_price: float | None = Field(
        None, gt=0, description="Limit price (LIMIT orders)"
    )
    stop_loss: float | None = Field(None, gt=0, description="Stop-loss price")
    take_profit: float | None = Field(
        None, gt=0, description="Take-profit price"
    )
    reasoning: str | None = Field(None, description="Free-text rationale")
    asset_type: Literal["equity", "option"] = Field(
        "equity", description="Instrument kind"
    )
    option_type: OptionType | None = Field(None, description="CALL or PUT")
    strike: float | None = Field(None, gt=0, description="Option strike")
    expiration: date | None = Field(None, description="Option expiration")

    @field_validator("symbol")
    @classmethod
    def normalise_symbol(cls, v: str) -> str:
        cleaned = v.strip().upper()
        if not cleaned.replace("-", "").replace(".", "").isalnum():
            raise ValueError(f"Invalid symbol: {v}")
        return cleaned

    @field_validator("quantity")
    @classmethod
    def validate_quantity(cls, v):
        """Validate quantity is reasonable"""
        if v > 1000000:
            raise ValueError("Quantity too large - maximum 1,000,000 allowed")
        return v

    @model_validator(mode="after")
    def validate_limit_price(self) -> "TradeRequest":
        """Limit price is required for LIMIT orders"""
        if self.order_type == OrderType.LIMIT and self.limit_price is None:
            raise ValueError("Limit price is required for LIMIT orders")
        return self

    @property
    def is_option(self) -> bool:
        return self.asset_type == "option" or any(
            value is not None
            for value in (self.option_type, self.strike, self.expiration)
        )

    def instrument(self) -> Instrument:
        """Build the instrument this request trades

        Raises:
            InvalidInstrument: If an options request lacks type, strike
                or expiration
        """
        if not self.is_option:
            return Equity(symbol=self.symbol)

        missing = [
            name
            for name, value in (
                ("option_type", self.option_type),
                ("strike", self.strike),
                ("expiration", self.expiration),
            )
            if value is None
        ]
        if missing:
            raise InvalidInstrument(
                f"Options request for {self.symbol} is missing: {', '.join(missing)}"
            )
        return OptionContractSpec(
            symbol=self.symbol,
            option_type=self.option_type,
            strike=self.strike,
            expiration=self.expiration,
        )
