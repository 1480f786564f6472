"""engine - Boundary to the external Payrolla calculation engine.

Scope:
- Request/response data contract (schemas.py)
- CalculationEngine protocol and the HTTP implementation (client.py)

Constraints:
- No payroll logic here; one request in, one response out
- Orchestration code depends on CalculationEngine only
"""

from .client import CALCULATE_PATH, CalculationEngine, PayrollaEngine
from .schemas import (
    CalculationParams,
    CalculationResponse,
    CustomGlobalParams,
    IncomeTaxLimit,
    PaymentLine,
    Payroll,
    PayrollFigures,
    WageCalculationModel,
)

__all__ = [
    # Client
    "CALCULATE_PATH",
    "CalculationEngine",
    "PayrollaEngine",
    # Wire schemas
    "CalculationParams",
    "CalculationResponse",
    "CustomGlobalParams",
    "IncomeTaxLimit",
    "PaymentLine",
    "Payroll",
    "PayrollFigures",
    "WageCalculationModel",
]
