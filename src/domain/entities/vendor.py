"""
Vendor Entities

Contractors, their contracts and history, and the quotes they submit.
"""

from typing import Any, ClassVar, Dict, List, Optional

from sqlmodel import Field

from .document import Document
from .enums import QuoteStatus


class Vendor(Document):
    collection_name: ClassVar[str] = "vendors"

    tenant_id: str
    name: str = Field(max_length=255)
    contact_info: Dict[str, Any] = Field(default_factory=dict)
    service_categories: List[str] = Field(default_factory=list)
    rating: Optional[float] = None
    is_preferred: bool = False
    notes: Optional[str] = None


class VendorContract(Document):
    collection_name: ClassVar[str] = "vendor_contracts"

    tenant_id: str
    vendor_id: str
    contract_name: str
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    cost_amount: Optional[float] = None
    status: str = "active"


class VendorHistory(Document):
    collection_name: ClassVar[str] = "vendor_history"

    tenant_id: str
    vendor_id: str
    event_type: str
    description: Optional[str] = None
    event_date: Optional[str] = None
    recorded_by: Optional[str] = None


class Quote(Document):
    collection_name: ClassVar[str] = "quotes"

    tenant_id: str
    vendor_id: Optional[str] = None
    project_title: str
    description: Optional[str] = None
    amount: float = 0.0
    status: QuoteStatus = QuoteStatus.submitted
    valid_until: Optional[str] = None
    requested_by: Optional[str] = None
