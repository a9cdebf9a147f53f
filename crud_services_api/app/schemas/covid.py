"""
Pydantic models for COVID-19 state and district statistics.

``DistrictCreate`` is used for ``POST /districts/``; ``DistrictUpdate``
has every field optional so a ``PUT`` only touches the fields it
carries.
"""

from typing import Optional

from pydantic import Field

from .base import CamelModel


class StateRead(CamelModel):
    state_id: int
    state_name: str
    population: Optional[int] = None


class DistrictBase(CamelModel):
    district_name: str = Field(..., examples=["Bagalkot"])
    state_id: int = Field(..., examples=[3])
    cases: int = Field(0, ge=0, examples=[2323])
    cured: int = Field(0, ge=0, examples=[2000])
    active: int = Field(0, ge=0, examples=[315])
    deaths: int = Field(0, ge=0, examples=[8])


class DistrictCreate(DistrictBase):
    """Schema for adding a district."""
    pass


class DistrictRead(DistrictBase):
    """Schema for reading a district."""

    district_id: int


class DistrictUpdate(CamelModel):
    """Schema for updating a district.

    All fields are optional; only provided fields will be updated.
    """

    district_name: Optional[str] = None
    state_id: Optional[int] = None
    cases: Optional[int] = Field(None, ge=0)
    cured: Optional[int] = Field(None, ge=0)
    active: Optional[int] = Field(None, ge=0)
    deaths: Optional[int] = Field(None, ge=0)


class StateStats(CamelModel):
    total_cases: int
    total_cured: int
    total_active: int
    total_deaths: int


class DistrictStateName(CamelModel):
    state_name: str
