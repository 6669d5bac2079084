from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator, model_validator
from typing import Any, Dict, Optional
from datetime import datetime, timezone

class SlipState(str, Enum):
    RECEIVED = "RECEIVED"
    SENT_TO_VERIFIER = "SENT_TO_VERIFIER"
    REJECTED_NOT_A_SLIP = "REJECTED_NOT_A_SLIP"
    VERIFIED = "VERIFIED"
    DUPLICATE = "DUPLICATE"
    RECEIVER_MISMATCH = "RECEIVER_MISMATCH"
    ACCEPTED = "ACCEPTED"

# Shapes returned by the slip verification API. Everything is optional:
# a missing field is a rejection decided by the verifier, not a parse error.
# Null members fall back to their defaults and unreadable dates or amounts
# become None, rendered as "-".

_DATETIME = TypeAdapter(datetime)
_FLOAT = TypeAdapter(float)

class PayloadModel(BaseModel):
    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data

class AccountName(PayloadModel):
    th: Optional[str] = None
    en: Optional[str] = None

class AccountNumber(PayloadModel):
    type: Optional[str] = None
    account: Optional[str] = None

class Account(PayloadModel):
    name: AccountName = Field(default_factory=AccountName)
    bank: Optional[AccountNumber] = None
    proxy: Optional[AccountNumber] = None

class Bank(PayloadModel):
    id: Optional[str] = None
    name: Optional[str] = None
    short: Optional[str] = None

class Party(PayloadModel):
    bank: Bank = Field(default_factory=Bank)
    account: Account = Field(default_factory=Account)

    @property
    def bank_label(self) -> str:
        return self.bank.short or self.bank.name or "-"

    @property
    def account_number(self) -> str:
        for number in (self.account.bank, self.account.proxy):
            if number and number.account:
                return number.account
        return "-"

class SlipAmount(PayloadModel):
    amount: Optional[float] = None

    @field_validator("amount", mode="before")
    @classmethod
    def lenient_amount(cls, value: Any) -> Optional[float]:
        try:
            return _FLOAT.validate_python(value)
        except ValidationError:
            return None

class SlipData(PayloadModel):
    model_config = ConfigDict(populate_by_name=True)

    trans_ref: Optional[str] = Field(None, alias="transRef")
    date: Optional[datetime] = None
    amount: SlipAmount = Field(default_factory=SlipAmount)
    sender: Party = Field(default_factory=Party)
    receiver: Party = Field(default_factory=Party)

    @field_validator("trans_ref", mode="before")
    @classmethod
    def reference_as_text(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("date", mode="before")
    @classmethod
    def lenient_date(cls, value: Any) -> Optional[datetime]:
        try:
            return _DATETIME.validate_python(value)
        except ValidationError:
            return None

class SlipPayload(BaseModel):
    status: Optional[int] = None
    data: Optional[SlipData] = None

class SlipRecord(BaseModel):
    transaction_reference: str
    amount: Optional[float] = None
    date: Optional[datetime] = None
    sender_bank: str = "-"
    sender_account: str = "-"
    receiver_bank: str = "-"
    receiver_account: str = "-"
    receiver_name: str = ""
    payload: Dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

class SlipVerdict(BaseModel):
    state: SlipState
    transaction_reference: Optional[str] = None
    reply_text: Optional[str] = None
    record: Optional[SlipRecord] = None
