"""Insurer schemas."""

from pydantic import BaseModel


class InsurerOption(BaseModel):
    """Insurer choice for the contract selector."""

    code: str
    label: str
