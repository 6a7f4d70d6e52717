from pydantic import BaseModel


class ErrorResponse(BaseModel):
    error_code: str
    message: str


class DeleteResponse(BaseModel):
    id: str
    deleted: bool
