from typing import Annotated

from fastapi import Path

from ..schemas.base import MAX_RECORD_ID

# Ids past the INTEGER column range are rejected as bad input
RecordId = Annotated[int, Path(le=MAX_RECORD_ID)]
