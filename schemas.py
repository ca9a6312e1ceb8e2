from pydantic import BaseModel
from typing import Optional


class StandardResponse(BaseModel):
    code: int = 200
    msg: str = "ok"
    data: dict | list = []
    request_method: Optional[str] = None
