# app/models/claim.py

from datetime import datetime
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Claim(BaseModel):
    """One email bound to one code; stored under ``claim:<email>``."""

    model_config = ConfigDict(populate_by_name=True)

    code: str
    name: str
    email: str
    claimed_at: datetime = Field(alias="claimedAt")
    index: int


class CodeStatus(BaseModel):
    total: int
    claimed: int
    remaining: int


class Success(BaseModel):
    status: Literal["success"] = "success"
    code: str
    remaining: int
    total: int


class AlreadyClaimed(BaseModel):
    status: Literal["already_claimed"] = "already_claimed"
    code: str
    name: str


class Exhausted(BaseModel):
    status: Literal["exhausted"] = "exhausted"
    error: Optional[str] = None


ClaimResult = Union[Success, AlreadyClaimed, Exhausted]


class ClaimList(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_claims: int = Field(alias="totalClaims")
    claims: List[Claim]
