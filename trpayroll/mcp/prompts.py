"""Prompt templates that walk an agent through the payroll tools."""

from typing import Optional

from trpayroll.sdk.params import BASE_YEAR, load_default_params


def budget_simulation_prompt(employee_count: str, scenario_type: Optional[str] = None) -> str:
    scenario_text = scenario_type or "any type of"
    min_wage = load_default_params(BASE_YEAR).min_wage
    return f"""You are helping calculate a payroll budget simulation for Turkish employees.

The user has {employee_count} employees. They want to simulate a {scenario_text} scenario.

**Your task:**

1. First, ask the user for each employee's details:
   - Name
   - Current salary amount
   - Whether it's Net or Gross salary

2. Ask about the scenario parameters they want to simulate:
   - Salary raise percentage (e.g., 10 for a 10% raise)
   - New minimum wage if different from current (current {BASE_YEAR}: {min_wage:,.2f} TL gross)
   - Tax bracket changes if any

3. Use the **simulate_budget** tool with the collected data to calculate results.

4. Present a clear summary showing:
   - Current state vs. scenario comparison
   - Total yearly cost difference
   - Per-employee breakdown

**Important:** All monetary values are in Turkish Lira (TL). Use the {BASE_YEAR} default parameters as baseline unless the user specifies otherwise."""


def salary_raise_analysis_prompt(raise_percentages: str) -> str:
    return f"""You are analyzing the cost impact of different salary raise scenarios for Turkish employees.

The user wants to compare these raise percentages: {raise_percentages}

**Your task:**

1. Ask the user for their employee list:
   - Each employee's name
   - Current salary
   - Salary type (Net or Gross)

2. Use the **compare_scenarios** tool to calculate all raise scenarios side by side.
   - Put a 0% raise scenario first; it is used as the baseline
   - Create one scenario for each raise percentage
   - Use a period_count of 12 for a yearly calculation

3. Present results in a clear comparison table:
   - Scenario name
   - Total yearly cost
   - Cost difference from baseline (0% raise)
   - Percentage change

4. Provide a recommendation on the most cost-effective option.

**Note:** The comparison uses Turkish payroll rules including progressive income tax, SSI contributions, and stamp tax."""


def year_planning_prompt(planning_year: str) -> str:
    return f"""You are helping plan the {planning_year} payroll budget for a Turkish company.

**Your task:**

1. First, use **get_default_params** to show the {planning_year} parameters:
   - Minimum wage (gross and net)
   - SSI contribution limits
   - Income tax brackets
   - Stamp tax ratio

2. Ask the user about their workforce:
   - Number of employees
   - Current salaries for each employee

3. Ask about expected changes for {planning_year}:
   - Expected minimum wage increase (if any)
   - Expected tax bracket adjustments
   - Planned salary raises for employees

4. Use **simulate_budget** to calculate:
   - Current cost (no changes)
   - Projected cost with expected changes

5. Provide a comprehensive summary:
   - Monthly and yearly cost projections
   - Budget increase/decrease compared to current
   - Per-employee cost breakdown
   - Recommendations for budget planning

**Currency:** All values in Turkish Lira (TL)"""
