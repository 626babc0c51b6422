"""Record kinds served by the generic record endpoints"""

from typing import Dict, Type

from src.app.services.unit_of_work import RECORD_KINDS
from src.domain.entities import Document

# Tenant-scoped kinds without workflow rules of their own
LEAF_KINDS: Dict[str, Type[Document]] = {
    collection: RECORD_KINDS[collection]
    for collection in (
        "units",
        "expenses",
        "vendors",
        "vendor_contracts",
        "vendor_history",
        "quotes",
        "meetings",
        "documents",
        "document_folders",
        "announcements",
        "messages",
        "funds",
        "fund_transactions",
        "payment_reminders",
    )
}
