from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response format."""

    status: str = Field(..., description="'fail' for client errors, 'error' for server errors")
    message: str = Field(..., description="Human-readable error message")
    type: str = Field(..., description="Machine-readable error type")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"status": "fail", "message": "Note with ID: 6521e59541a3ae69b39ecb46 not found", "type": "not_found"},
                {"status": "fail", "message": "Note with title 'Groceries' already exists", "type": "duplicate_key"},
                {"status": "fail", "message": "Invalid id: 'not-an-id'", "type": "validation_error"},
                {"status": "error", "message": "A database error occurred.", "type": "query_failure"},
            ]
        }
    }


class StatusMessage(BaseModel):
    status: str
    message: str
