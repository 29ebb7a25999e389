"""
Error -> HTTP mapping.
Every endpoint reports a failed Result through raise_for_error so each
error kind always maps to the same status code.
"""
from fastapi import HTTPException, status

from deelrate.domain.result import Error, ErrorType


STATUS_BY_ERROR_TYPE = {
    ErrorType.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorType.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorType.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorType.FAILURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(error: Error, upstream: bool = False) -> int:
    """
    HTTP status for an error.

    Args:
        error: Failed operation's error
        upstream: The failure came from the rate provider (502 instead of 500)
    """
    if upstream and error.error_type == ErrorType.FAILURE:
        return status.HTTP_502_BAD_GATEWAY
    return STATUS_BY_ERROR_TYPE[error.error_type]


def raise_for_error(error: Error, upstream: bool = False) -> None:
    """Raise the HTTPException for an error."""
    raise HTTPException(
        status_code=status_for(error, upstream),
        detail={
            "code": error.code,
            "description": error.description,
            "type": error.error_type.value,
        },
    )
