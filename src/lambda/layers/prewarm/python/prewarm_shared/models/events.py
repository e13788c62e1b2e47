"""Typed EventBridge models for RDS lifecycle notifications using Pydantic v2.

The envelope mirrors what EventBridge delivers to the Lambda target; ``detail``
carries the RDS event payload. Unknown keys are ignored so newer RDS fields do
not break parsing.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

RDS_EVENT_SOURCE = "aws.rds"
RDS_INSTANCE_DETAIL_TYPE = "RDS DB Instance Event"
# "A new DB instance has been created"
NEW_INSTANCE_EVENT_ID = "RDS-EVENT-0005"


class LifecycleEvent(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    event_categories: List[str] = Field(default_factory=list, alias="EventCategories")
    source_type: Optional[str] = Field(default=None, alias="SourceType")
    source_arn: Optional[str] = Field(default=None, alias="SourceArn")
    event_id: str = Field(alias="EventID")
    source_identifier: str = Field(alias="SourceIdentifier")
    timestamp: Optional[str] = Field(default=None, alias="Date")
    message: Optional[str] = Field(default=None, alias="Message")

    @field_validator("event_id", "source_identifier")
    @classmethod
    def _strip(cls, v: str) -> str:
        return (v or "").strip()

    @property
    def event_category(self) -> Optional[str]:
        return self.event_categories[0] if self.event_categories else None


class EventEnvelope(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: Optional[str] = None
    source: str
    detail_type: str = Field(alias="detail-type")
    time: Optional[str] = None
    region: Optional[str] = None
    detail: LifecycleEvent
