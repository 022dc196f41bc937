from datetime import datetime, timezone
from typing import Optional, Union

GRAPH_TIME_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def parse_graph_time(value: Union[str, datetime, None]) -> Optional[datetime]:
    """Parse a Graph API timestamp ("2017-01-01T12:00:00+0000") to naive UTC."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.strptime(value, GRAPH_TIME_FORMAT)
        except ValueError:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed
