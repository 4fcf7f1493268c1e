"""API Gateway proxy response builders shared by the shortie handlers."""

import json
from typing import Any

from shortie.types import LambdaResponse


def json_response(status_code: int, body: dict[str, Any], headers: dict[str, str] | None = None) -> LambdaResponse:
    return {
        'statusCode': status_code,
        'headers': {'Content-Type': 'application/json', **(headers or {})},
        'body': json.dumps(body),
    }


def response_200(body: dict[str, Any] | None = None) -> LambdaResponse:
    return json_response(200, body or {})


def response_307(*, location: str) -> LambdaResponse:
    return {
        'statusCode': 307,
        'headers': {'Location': location},
        'body': '',  # no body needed for redirects
    }


def response_400(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    base = 'Bad Request'
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    return json_response(400, body)


def response_404(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    body = {'message': message or 'Not Found'}
    if error_code:
        body['errorCode'] = error_code
    return json_response(404, body)


def response_500(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    base = 'Internal Server Error'
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    return json_response(500, body)
