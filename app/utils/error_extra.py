from fastapi import HTTPException


def error_response(error: type[HTTPException]) -> dict:
    """Описание ошибки для параметра `responses` в декораторах роутов"""
    return {
        error.status_code: {
            "description": error.detail,
            "content": {"application/json": {"example": {"detail": error.detail}}},
        }
    }
