"""
Extract Layer Schemas

Models for data as it comes back from the Facebook Graph API.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from ..coreutils.time import parse_graph_time


class GraphImage(BaseModel):
    src: Optional[str] = None


class GraphMedia(BaseModel):
    image: Optional[GraphImage] = None


class GraphAttachment(BaseModel):
    """One item of the Graph `attachments` edge"""

    title: Optional[str] = None
    description: Optional[str] = None
    url: Optional[str] = None
    media: Optional[GraphMedia] = None


class GraphAttachmentsEdge(BaseModel):
    data: Optional[List[GraphAttachment]] = None


class RemoteAttachment(BaseModel):
    """First attachment of a feed posting"""

    title: Optional[str] = Field(None, description="Attachment title")
    description: Optional[str] = Field(None, description="Attachment description")
    url: Optional[str] = Field(None, description="Link target of the attachment")
    media_url: Optional[str] = Field(None, description="Image source URL")

    @classmethod
    def from_graph(cls, data: Any) -> Optional["RemoteAttachment"]:
        """
        Build from a Graph `attachments` edge; None when there is no attachment

        Raises:
            pydantic.ValidationError: The edge, an item or its media is not an object
        """
        if not data:
            return None
        if not (isinstance(data, dict) and "data" in data):
            data = {"data": [data]}
        edge = GraphAttachmentsEdge.model_validate(data)
        if not edge.data:
            return None

        first = edge.data[0]
        image = first.media.image if first.media else None
        return cls(
            title=first.title,
            description=first.description,
            url=first.url,
            media_url=image.src if image else None,
        )


class RemotePosting(BaseModel):
    """A single posting from a group feed"""

    id: str = Field(..., description="Graph id of the posting")
    created_time: Optional[datetime] = Field(None, description="Creation time (UTC)")
    updated_time: Optional[datetime] = Field(None, description="Last update (UTC)")
    message: Optional[str] = Field(None, description="Posting text")
    name: Optional[str] = Field(None, description="Display name of the shared link")
    attachment: Optional[RemoteAttachment] = None

    @field_validator("created_time", "updated_time", mode="before")
    @classmethod
    def validate_graph_time(cls, v):
        """Graph timestamps use a +0000 offset, normalise them to naive UTC"""
        return parse_graph_time(v)

    @classmethod
    def from_graph(cls, data: Dict[str, Any]) -> "RemotePosting":
        return cls(
            id=data["id"],
            created_time=data.get("created_time"),
            updated_time=data.get("updated_time"),
            message=data.get("message"),
            name=data.get("name"),
            attachment=RemoteAttachment.from_graph(data.get("attachments")),
        )


class RemoteGroup(BaseModel):
    """Group record with its feed"""

    id: str = Field(..., description="Graph id of the group")
    name: str = Field(..., description="Group display name")
    feed: List[RemotePosting] = Field(default_factory=list)


class GraphPaging(BaseModel):
    next: Optional[str] = None


class GraphFeedPage(BaseModel):
    """One page of the Graph `feed` edge, items still raw"""

    data: Optional[List[Dict[str, Any]]] = None
    paging: Optional[GraphPaging] = None
