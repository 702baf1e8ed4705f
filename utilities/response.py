from typing import Any, Dict, Optional
from pydantic import BaseModel

class APIResponse(BaseModel):
    success: bool
    message: Optional[str] = None
    data: Optional[Any] = None

def dump_data(data: Any) -> Any:
    """Serialize response models with their client-facing (camelCase) names"""
    if isinstance(data, BaseModel):
        return data.model_dump(by_alias=True, mode="json")
    if isinstance(data, (list, tuple)):
        return [dump_data(item) for item in data]
    return data

def success_response(data: Any = None, message: str = None) -> Dict:
    """Create a success response; pydantic models in ``data`` are dumped by alias"""
    return APIResponse(success=True, data=dump_data(data), message=message).model_dump()

def error_response(message: str, data: Any = None) -> Dict:
    """Create an error response"""
    return APIResponse(success=False, message=message, data=dump_data(data)).model_dump()
