"""Pydantic schemas for API request/response models."""

from decimal import Decimal

from pydantic import BaseModel, Field

from loan_calculator.models.loan import Frequency


# ---- Request schemas ----

class FeeRequest(BaseModel):
    upfront_fee: Decimal | None = Field(None, ge=0, description="Charged in period 1 only")
    ongoing_fee: Decimal | None = Field(None, ge=0)
    start_period: int = Field(1, ge=1, description="First period of the ongoing fee")
    end_period: int | None = Field(None, ge=1, description="Last period of the ongoing fee; open-ended if omitted")
    ongoing_fee_frequency: int = Field(Frequency.MONTHLY, ge=1)


class AdjustmentRequest(BaseModel):
    """Loan fields overridden over a period window (e.g. a rate change)."""
    start_period: int = Field(1, ge=1)
    end_period: int | None = Field(None, ge=1)
    context: dict[str, int | Decimal] = Field(..., description="Loan field name -> value")


class AmortizationRequest(BaseModel):
    principal: Decimal = Field(..., ge=0)
    interest_rate: Decimal = Field(..., description="Nominal rate, e.g. 0.06 for 6%")
    interest_rate_frequency: int = Frequency.YEARLY
    term: Decimal = Field(..., ge=0)
    term_frequency: int = Frequency.YEARLY
    repayment_frequency: int = Frequency.MONTHLY

    fees: list[FeeRequest] = []
    adjustments: list[AdjustmentRequest] = []
    include_yearly: bool = False


# ---- Response schemas ----

class SummaryItemResponse(BaseModel):
    period: int
    principal_initial_balance: Decimal
    principal_final_balance: Decimal
    interest_paid: Decimal
    principal_paid: Decimal
    pmt: Decimal
    fee: Decimal


class TotalsResponse(BaseModel):
    pmt: Decimal
    interest_paid: Decimal
    fee: Decimal


class YearlySummaryResponse(BaseModel):
    year: int
    principal: Decimal
    interest: Decimal
    pmt: Decimal
    fee: Decimal
    ending_balance: Decimal


class AmortizationResponse(BaseModel):
    number_of_periods: int
    summary_list: list[SummaryItemResponse]
    totals: TotalsResponse
    yearly: list[YearlySummaryResponse] | None = None
