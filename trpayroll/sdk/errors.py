"""tr-payroll exception hierarchy."""


class PayrollError(Exception):
    """Base exception for all tr-payroll errors."""


class ConfigError(PayrollError):
    """Settings are present but unusable."""


class MissingCredentialError(ConfigError):
    """The engine API key is not configured."""


class PayrollInputError(PayrollError):
    """Caller input cannot be calculated (e.g. zero periods, no scenarios)."""


class EngineError(PayrollError):
    """The calculation engine could not be reached or rejected the request."""


class NoPayrollResultError(EngineError):
    """The engine answered without a payroll for the requested period."""

    def __init__(self, year: int, month: int) -> None:
        self.year = year
        self.month = month
        super().__init__(
            f"Payrolla calculation returned no payroll data for {year}-{month:02d}"
        )
