from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel

from .status import AgingStatus, classify_status


class AuditRecord(BaseModel):
    """
    One customer balance from the ledger.

    Records are frozen once built; ``status`` is derived from ``aging_days``
    on every access and cannot be assigned.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: str
    customer_name: str = Field(min_length=1)
    total_balance: float = Field(allow_inf_nan=False)
    aging_days: int = Field(default=0, ge=0)
    invoice_date: str

    @computed_field  # type: ignore[prop-decorator]
    @property
    def status(self) -> AgingStatus:
        return classify_status(self.aging_days)


class IngestReport(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    delimiter: str
    encoding: Optional[str] = Field(default=None, examples=["utf-8"])
    lines_read: int = 0
    rows_accepted: int = 0
    rows_skipped: int = 0


class IngestResponse(BaseModel):
    records: List[AuditRecord] = Field(default_factory=list)
    report: IngestReport


class IngestErrorResponse(BaseModel):
    code: str
    message: str


class HealthResponse(BaseModel):
    ok: bool = True
