"""Turkish payroll calculations exposed as agent tools."""

__version__ = "1.0.0"
