"""
Tenant Leaf Entities

Simple tenant-scoped records without a lifecycle of their own.
"""

from typing import ClassVar, List, Optional

from sqlmodel import Field

from .document import Document
from .enums import MeetingStatus


class Unit(Document):
    collection_name: ClassVar[str] = "units"

    tenant_id: str
    unit_number: str
    unit_type: Optional[str] = None
    square_footage: Optional[int] = None
    owner_name: Optional[str] = None
    owner_email: Optional[str] = None
    owner_phone: Optional[str] = None


class Meeting(Document):
    collection_name: ClassVar[str] = "meetings"

    tenant_id: str
    title: str = Field(max_length=255)
    description: Optional[str] = None
    meeting_type: str = "general"
    scheduled_at: Optional[str] = None
    location: Optional[str] = None
    status: MeetingStatus = MeetingStatus.scheduled
    invitees: List[str] = Field(default_factory=list)
    minutes: Optional[str] = None


class StrataDocument(Document):
    """An uploaded file's metadata"""

    collection_name: ClassVar[str] = "documents"

    tenant_id: str
    title: str = Field(max_length=255)
    folder_id: Optional[str] = None
    file_url: Optional[str] = None
    file_name: Optional[str] = None
    file_size: Optional[int] = None
    mime_type: Optional[str] = None
    uploaded_by: Optional[str] = None
    tags: List[str] = Field(default_factory=list)


class DocumentFolder(Document):
    collection_name: ClassVar[str] = "document_folders"

    tenant_id: str
    name: str = Field(max_length=255)
    parent_folder_id: Optional[str] = None
    path: Optional[str] = None
    created_by: Optional[str] = None


class Announcement(Document):
    collection_name: ClassVar[str] = "announcements"

    tenant_id: str
    title: str = Field(max_length=255)
    content: str
    priority: str = "normal"
    published_by: Optional[str] = None
    published: bool = False


class Message(Document):
    collection_name: ClassVar[str] = "messages"

    tenant_id: str
    sender_id: str
    recipient_id: Optional[str] = None
    conversation_id: Optional[str] = None
    subject: Optional[str] = None
    content: str
    is_read: bool = False
