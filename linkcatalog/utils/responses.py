"""API Gateway (Lambda proxy) response builders shared by the links API lambdas.

Error bodies follow one shape:

    {"message": "Not Found (link with id '7' doesn't exist)", "error_code": "dao:link_not_found_error"}
"""

import json
from typing import Any

from linkcatalog.types import LambdaResponse


# TODO: restrict allowed origins once the frontend has a fixed domain
CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Headers': 'Content-Type',
    'Access-Control-Allow-Methods': 'OPTIONS,GET,POST,PUT,DELETE',
}


def json_response(status_code: int, body: Any) -> LambdaResponse:
    return {
        'statusCode': status_code,
        'headers': {'Content-Type': 'application/json', **CORS_HEADERS},
        'body': json.dumps(body, ensure_ascii=False),
    }


def _error(status_code: int, base: str, message: str | None, error_code: str | None) -> LambdaResponse:
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['error_code'] = error_code
    return json_response(status_code, body)


def response_400(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _error(400, 'Bad Request', message, error_code)


def response_404(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _error(404, 'Not Found', message, error_code)


def response_405(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _error(405, 'Method Not Allowed', message, error_code)


def response_500(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _error(500, 'Internal Server Error', message, error_code)
