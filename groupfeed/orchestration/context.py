from dataclasses import dataclass
from typing import Optional

from ..extract.schemas import RemoteGroup
from ..load.models import Group


@dataclass
class GroupContext:
    """State filled in step by step for a single load-group run."""

    url: str
    html: str = ""
    fb_id: Optional[str] = None
    api_data: Optional[RemoteGroup] = None
    group: Optional[Group] = None
