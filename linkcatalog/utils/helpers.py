"""Helper utilities for AWS lambda functions.

Functions:
    json_body(event: dict) -> Any
        Decode the JSON request body of an API Gateway event
    path_parameter(event: dict, name: str) -> str | None
        Extract a path parameter from an API Gateway event
    require_environment(*names: str) -> Callable
        Decorator: Ensure required environment variables are present
    guarantee_500_response(handler) -> Callable
        Decorator: Turn unexpected handler exceptions into HTTP 500 responses

Example:
    Typical usage inside a Lambda handler:

        >>> from linkcatalog.utils.helpers import json_body, path_parameter
        >>> event = {
        ...     "body": '{"title": "Zoom Meeting", "url": "https://zoom.us"}',
        ...     "pathParameters": {"link_id": "3"},
        ... }
        >>> json_body(event)
        {'title': 'Zoom Meeting', 'url': 'https://zoom.us'}

        >>> path_parameter(event, 'link_id')
        '3'
"""

import os
import json
import logging
import functools
from typing import Any
from collections.abc import Callable

from linkcatalog.constants import UNKNOWN_INTERNAL_SERVER_ERROR
from linkcatalog.exceptions import MissingEnvironmentVariableError
from linkcatalog.utils.runtime import running_locally


logger = logging.getLogger(__name__)


def json_body(event: dict[str, Any]) -> Any:
    """Decode the JSON body of an API Gateway event

    An absent or empty body decodes to an empty object.

    Args:
        event (dict): API Gateway event object passed to Lambda handler

    Returns:
        Any: decoded JSON value

    Raises:
        json.JSONDecodeError:
            If the body isn't valid JSON.
    """
    return json.loads(event.get('body') or '{}')


def path_parameter(event: dict[str, Any], name: str) -> str | None:
    """Extract a path parameter from an API Gateway event

    Args:
        event (dict): API Gateway event object passed to Lambda handler
        name (str): path parameter name, e.g. 'link_id'

    Returns:
        str | None: the parameter value, None if missing
    """
    return (event.get('pathParameters') or {}).get(name)


def require_environment(*names: str) -> Callable:
    """Decorator ensuring required environment variables are present.

    Args:
        *names (str):
            Names of required environment variables.

    Raises:
        MissingEnvironmentVariableError:
            If any required environment variable is missing or empty.

    Example:
        >>> @require_environment('APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID')
        ... def my_function():
        ...     pass
        >>> my_function()
        MissingEnvironmentVariableError: Missing required environment variables: 'APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID'
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            missing = [name for name in names if not os.environ.get(name)]
            if missing:
                missing_list = ', '.join(f"'{name}'" for name in missing)
                raise MissingEnvironmentVariableError(f'Missing required environment variables: {missing_list}')
            return func(*args, **kwargs)

        return wrapper

    return decorator


def guarantee_500_response(handler: Callable) -> Callable:
    """Decorator: respond with HTTP 500 instead of crashing on unexpected errors

    When running locally the original exception is re-raised so it shows up
    with its traceback in SAM's output.

    Args:
        handler (Callable):
            Lambda handler taking (event, context).

    Returns:
        Callable: wrapped lambda handler.
    """

    @functools.wraps(handler)
    def wrapper(event, context, *args, **kwargs):
        try:
            return handler(event, context, *args, **kwargs)
        except Exception:
            if running_locally():
                raise
            logger.exception('Unhandled exception in lambda handler. Responding with 500.', extra={'event': UNKNOWN_INTERNAL_SERVER_ERROR})
            return {
                'statusCode': 500,
                'body': json.dumps(
                    {
                        'message': 'Internal Server Error',
                        'error_code': UNKNOWN_INTERNAL_SERVER_ERROR,
                    }
                ),
            }

    return wrapper
