"""Amortization routes."""

from fastapi import APIRouter, HTTPException

from loan_calculator.api.schemas import (
    AmortizationRequest,
    AmortizationResponse,
    SummaryItemResponse,
    TotalsResponse,
    YearlySummaryResponse,
)
from loan_calculator.engine.adjustments import Adjustment
from loan_calculator.engine.amortization import LoanCalculator, yearly_summary
from loan_calculator.exceptions import LoanCalculatorError

router = APIRouter(prefix="/api/v1", tags=["amortization"])


def _build_calculator(req: AmortizationRequest) -> LoanCalculator:
    """Build the engine and register fees, then overrides, in request order."""
    calculator = LoanCalculator(
        principal=req.principal,
        interest_rate=req.interest_rate,
        interest_rate_frequency=req.interest_rate_frequency,
        term=req.term,
        term_frequency=req.term_frequency,
        repayment_frequency=req.repayment_frequency,
    )
    for fee in req.fees:
        calculator.fee(
            upfront_fee=fee.upfront_fee,
            ongoing_fee=fee.ongoing_fee,
            start_period=fee.start_period,
            end_period=fee.end_period,
            ongoing_fee_frequency=fee.ongoing_fee_frequency,
        )
    for adj in req.adjustments:
        calculator.add_adjustment(Adjustment(
            start_period=adj.start_period,
            end_period=adj.end_period,
            context=adj.context,
        ))
    return calculator


@router.post("/amortization", response_model=AmortizationResponse)
async def amortization(req: AmortizationRequest):
    """Loan terms + fees/overrides → per-period schedule and totals."""
    try:
        calculator = _build_calculator(req)
        result = calculator.calculate()
        yearly = (
            yearly_summary(result, req.repayment_frequency) if req.include_yearly else None
        )
    except LoanCalculatorError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return AmortizationResponse(
        number_of_periods=result.number_of_periods,
        summary_list=[
            SummaryItemResponse(
                period=item.period,
                principal_initial_balance=item.principal_initial_balance,
                principal_final_balance=item.principal_final_balance,
                interest_paid=item.interest_paid,
                principal_paid=item.principal_paid,
                pmt=item.pmt,
                fee=item.fee,
            )
            for item in result.summary_list
        ],
        totals=TotalsResponse(
            pmt=result.totals.pmt,
            interest_paid=result.totals.interest_paid,
            fee=result.totals.fee,
        ),
        yearly=(
            [
                YearlySummaryResponse(
                    year=int(y["year"]),
                    principal=y["principal"],
                    interest=y["interest"],
                    pmt=y["pmt"],
                    fee=y["fee"],
                    ending_balance=y["ending_balance"],
                )
                for y in yearly
            ]
            if yearly is not None
            else None
        ),
    )
