"""
Request bodies for the entry endpoints.

Fields are deliberately loose (``Any``): the entry service checks them in a
fixed order and reports the first problem as a 400 naming the field, instead
of letting pydantic answer with a 422 listing every mismatch.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class CreateEntryInput(BaseModel):
    """Request body for creating an entry."""

    sponsor_name: Any = Field(None, description="Name of the sponsor")
    email: Any = Field(None, description="Sponsor email address")
    phone: Any = Field(None, description="Optional contact phone")
    dedication_type: Any = Field(None, description="'In Honor Of' or 'In Memory Of'")
    dedication_name: Any = Field(None, description="Person the dedication is for")
    occasion: Any = Field(None, description="Optional occasion")
    message: Any = Field(None, description="Optional message")
    preferred_date: Any = Field(None, description="Preferred date, free-form")
    amount: Any = Field(None, description="Amount in cents, minimum 1800")


class UpdateEntryInput(BaseModel):
    """Request body for patching an entry.

    Only fields present in the body are applied; use ``model_fields_set`` to
    tell an omitted field from an explicit null.
    """

    status: Any = Field(None, description="New lifecycle status")
    assigned_date: Any = Field(None, description="Assigned date (null clears it)")
