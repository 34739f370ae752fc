"""
Input models for equation evaluation requests.
"""

from pydantic import BaseModel, Field, field_validator


class EvaluateRequest(BaseModel):
    """A batch of equations evaluated together, sharing variables."""
    equations: list[str] = Field(
        ...,
        description="Equations, one per entry, e.g. ['x = 5m', 'y = x + 3m']",
    )
    sig_figs: int = Field(default=6, ge=1, le=50, description="Significant figures in results")

    @field_validator("equations")
    @classmethod
    def validate_single_lines(cls, v: list[str]) -> list[str]:
        for equation in v:
            if "\n" in equation:
                raise ValueError("Each equation must be a single line")
        return v
