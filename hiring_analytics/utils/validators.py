"""Data validation utilities using pandera."""

import pandas as pd
import pandera as pa
from pandera import DataFrameSchema

type ValidationResult = dict[str, str | bool | list[str]]


def validate_dataframe(df: pd.DataFrame, schema: DataFrameSchema) -> ValidationResult:
    """Validate a DataFrame against a pandera schema."""
    try:
        schema.validate(df, lazy=True)
        return {"valid": True, "status": "ok", "errors": []}
    except pa.errors.SchemaErrors as e:
        errors = []
        for _, row in e.failure_cases.iterrows():
            match row.to_dict():
                case {"column": col, "check": check, "failure_case": val}:
                    errors.append(f"Column '{col}' failed check '{check}': {val}")
                case failure:
                    errors.append(f"Validation failure: {failure}")
        return {"valid": False, "status": "error", "errors": errors}


def check_round_slots(slot_counts: dict[str, int], expected: int) -> ValidationResult:
    """Check that each repeated per-round column group appears ``expected`` times.

    Round columns are assigned by position, so a reordered or extended sheet
    shifts data between rounds without any other visible symptom.
    """
    issues = [
        f"'{label}' appears {count} times, expected {expected}"
        for label, count in slot_counts.items()
        if count != expected
    ]

    match issues:
        case []:
            return {"valid": True, "status": "ok", "errors": []}
        case errors:
            return {"valid": False, "status": "error", "errors": errors}
