"""
Core Data Models for Kakeibo

These models define the schemas for everything that flows through the
ledger:
1. Transaction - one itemized amount filed under a date
2. AccountData - the record persisted in an account file
3. RawEntry - one record produced by the input reader

DESIGN DECISION: Loading goes through AccountData, which states the
defaults for absent fields explicitly. A file without ``totals`` or
``transactions`` loads as empty maps; a file without ``name`` gets its
name from the filename (see Account.load).
"""

from datetime import date
from typing import Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)


class Transaction(BaseModel):
    """
    A single itemized amount.

    The sign convention (expense vs. income) is left to the user.
    Transactions are frozen once built; they belong to the date bucket
    they are appended to.
    """
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    amount: int = Field(
        default=0,
        description="Signed amount"
    )
    title: Optional[str] = Field(
        default=None,
        description="What was bought or received"
    )
    shop: Optional[str] = Field(
        default=None,
        description="Where it happened"
    )
    category: Optional[str] = Field(
        default=None,
        description="Free-text category label"
    )

    @field_validator("amount", mode="before")
    @classmethod
    def default_missing_amount(cls, v: Any) -> Any:
        return 0 if v is None else v


class AccountData(BaseModel):
    """
    The mapping stored in one account file.

    Keys other than name/totals/transactions are kept as extras and
    written back unchanged.
    """
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = Field(
        default=None,
        description="Human-readable account label"
    )
    totals: dict[date, int] = Field(
        default_factory=dict,
        description="Running-total balance recorded per date"
    )
    transactions: dict[date, list[Transaction]] = Field(
        default_factory=dict,
        description="Itemized transactions per date, in insertion order"
    )

    @field_validator("totals", "transactions", mode="before")
    @classmethod
    def empty_when_null(cls, v: Any) -> Any:
        """A key present with no value (``totals:``) counts as absent."""
        return {} if v is None else v

    @field_validator("transactions", mode="before")
    @classmethod
    def null_bucket_is_empty(cls, v: Any) -> Any:
        if isinstance(v, dict):
            return {k: ([] if bucket is None else bucket) for k, bucket in v.items()}
        return v


class RawEntry(BaseModel):
    """
    One record typed at the prompt, before resolution.

    Either ``total`` is set (a running balance for the date) or the
    amount/title/shop/category fields describe a transaction.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    date: Optional[str] = Field(
        default="",
        description="Full, partial or empty date text"
    )
    account: str = Field(
        default="",
        description="Account name prefix"
    )
    total: Optional[int] = Field(
        default=None,
        description="Running total for the date"
    )
    amount: int = 0
    title: Optional[str] = None
    shop: Optional[str] = None
    category: Optional[str] = None

    @field_validator("account", mode="before")
    @classmethod
    def account_none_is_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("amount", mode="before")
    @classmethod
    def amount_none_is_zero(cls, v: Any) -> Any:
        return 0 if v is None else v

    @property
    def is_total(self) -> bool:
        """True when this entry records a total rather than a transaction."""
        return self.total is not None

    def to_transaction(self) -> Transaction:
        return Transaction(
            amount=self.amount,
            title=self.title,
            shop=self.shop,
            category=self.category,
        )
