import json
from typing import cast
from unittest.mock import MagicMock

import pytest
from pytest import MonkeyPatch

from shortie.types import LambdaEvent, LambdaContext
from shortie.lambdas.shorten_url import app
from shortie.models import URLRecordModel
from shortie.dao.base import URLBaseDAO
from shortie.dao.memory import URLMemoryDAO
from shortie.dao.exceptions import DataStoreError
from shortie.exceptions import ShortcodeCollisionError
from shortie.utils import generate_shortcode


TARGET_URL = 'https://example.com/data/hi'


def post_event(body: str | None) -> LambdaEvent:
    return cast(LambdaEvent, {
        'resource': '/shortie',
        'httpMethod': 'POST',
        'path': '/shortie',
        'body': body,
        'requestContext': {'domainName': 'sho.rt', 'stage': 'Prod'},
    })


class TestShortenUrlHandler:

    @pytest.fixture
    def context(self) -> LambdaContext:
        return cast(LambdaContext, {'function_name': 'shorten_url'})

    @pytest.fixture(autouse=True)
    def setup(self, monkeypatch: MonkeyPatch, context: LambdaContext) -> None:
        self.dao = URLMemoryDAO()
        self.context = context

        # Patch Lambda dependencies
        monkeypatch.setattr(app, 'url_dao', lambda: self.dao)
        monkeypatch.setenv('APP_ENV', 'test')
        monkeypatch.delenv('AWS_SAM_LOCAL', raising=False)

    def test_lambda_handler(self) -> None:
        response = app.lambda_handler(post_event(json.dumps({'url': TARGET_URL})), self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 200
        assert response['headers']['Content-Type'] == 'application/json'
        assert body == {'shortUrl': 'https://sho.rt/shortie/4e24c46962'}
        assert self.dao.peek('4e24c46962') == URLRecordModel(shortcode='4e24c46962', target=TARGET_URL)

    def test_lambda_handler_when_invoked_locally(self) -> None:
        response = app.lambda_handler({'body': json.dumps({'url': TARGET_URL})}, self.context)

        assert json.loads(response['body']) == {'shortUrl': 'http://localhost:8421/shortie/4e24c46962'}

    def test_lambda_handler_is_idempotent(self) -> None:
        event = post_event(json.dumps({'url': TARGET_URL}))

        first = app.lambda_handler(event, self.context)
        self.dao.get('4e24c46962')
        second = app.lambda_handler(event, self.context)

        assert first['body'] == second['body']
        assert sum(self.dao.statistics('4e24c46962').values()) == 1

    def test_lambda_handler_with_expiration(self) -> None:
        response = app.lambda_handler(post_event(json.dumps({'url': TARGET_URL, 'expiration': 1730689222})), self.context)

        assert response['statusCode'] == 200
        assert self.dao.peek('4e24c46962').expiration == 1730689222

    @pytest.mark.parametrize(
        'body, error_code',
        [
            ('{not json', 'INVALID_JSON_BODY'),
            ('["https://example.com"]', 'INVALID_JSON_BODY'),
            (None, 'MISSING_TARGET_URL'),
            ('{}', 'MISSING_TARGET_URL'),
            ('{"url": ""}', 'MISSING_TARGET_URL'),
            ('{"url": 42}', 'MISSING_TARGET_URL'),
            ('{"url": "https://example.com", "expiration": "tomorrow"}', 'INVALID_EXPIRATION'),
            ('{"url": "https://example.com", "expiration": true}', 'INVALID_EXPIRATION'),
            ('{"url": "https://example.com", "expiration": 1.5}', 'INVALID_EXPIRATION'),
        ],
    )
    def test_lambda_handler_with_bad_request(self, body: str | None, error_code: str) -> None:
        response = app.lambda_handler(post_event(body), self.context)
        response_body = json.loads(response['body'])

        assert response['statusCode'] == 400
        assert response_body['message'].startswith('Bad Request')
        assert response_body['errorCode'] == error_code

    def test_lambda_handler_with_shortcode_collision(self) -> None:
        # Another URL already holds the default length shortcode
        taken = generate_shortcode(TARGET_URL)
        self.dao.save(URLRecordModel(shortcode=taken, target='https://other.example.com'))

        response = app.lambda_handler(post_event(json.dumps({'url': TARGET_URL})), self.context)
        body = json.loads(response['body'])

        longer = generate_shortcode(TARGET_URL, length=12)
        assert response['statusCode'] == 200
        assert body == {'shortUrl': f'https://sho.rt/shortie/{longer}'}
        assert self.dao.peek(taken).target == 'https://other.example.com'
        assert self.dao.peek(longer).target == TARGET_URL

    def test_lambda_handler_without_free_shortcodes(self) -> None:
        for length in range(10, 33, 2):
            self.dao.save(URLRecordModel(shortcode=generate_shortcode(TARGET_URL, length=length), target='https://other.example.com'))

        response = app.lambda_handler(post_event(json.dumps({'url': TARGET_URL})), self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 500
        assert body['errorCode'] == 'app:shortcode_collision_error'

    def test_lambda_handler_with_data_store_error(self, monkeypatch: MonkeyPatch) -> None:
        dao = MagicMock(spec=URLBaseDAO)
        dao.save.side_effect = DataStoreError("Can't connect to Redis at redis:6379/0.")
        monkeypatch.setattr(app, 'url_dao', lambda: dao)

        response = app.lambda_handler(post_event(json.dumps({'url': TARGET_URL})), self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 500
        assert body == {'message': 'Internal Server Error', 'errorCode': 'DATA_STORE_ERROR'}

    def test_lambda_handler_with_unexpected_error(self, monkeypatch: MonkeyPatch) -> None:
        monkeypatch.setattr(app, 'url_dao', MagicMock(side_effect=RuntimeError('Something goes wrong')))

        response = app.lambda_handler(post_event(json.dumps({'url': TARGET_URL})), self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 500
        assert body['errorCode'] == 'UNKNOWN_INTERNAL_SERVER_ERROR'


class TestSaveUrlRecord:

    def test_returns_default_length_shortcode(self) -> None:
        dao = URLMemoryDAO()
        assert app.save_url_record(dao, TARGET_URL) == '4e24c46962'

    def test_extends_shortcode_on_collision(self) -> None:
        dao = URLMemoryDAO()
        dao.save(URLRecordModel(shortcode='4e24c46962', target='https://other.example.com'))

        shortcode = app.save_url_record(dao, TARGET_URL)

        assert len(shortcode) == 12
        assert shortcode.startswith('4e24c46962')

    def test_reuses_extended_shortcode(self) -> None:
        dao = URLMemoryDAO()
        dao.save(URLRecordModel(shortcode='4e24c46962', target='https://other.example.com'))

        assert app.save_url_record(dao, TARGET_URL) == app.save_url_record(dao, TARGET_URL)

    def test_record_deleted_between_save_and_peek(self) -> None:
        dao = MagicMock(spec=URLBaseDAO)
        dao.peek.return_value = None

        assert app.save_url_record(dao, TARGET_URL, 5) == '4e24c46962'
        dao.save.assert_called_once_with(URLRecordModel(shortcode='4e24c46962', target=TARGET_URL, expiration=5))

    def test_raises_without_free_shortcodes(self) -> None:
        dao = MagicMock(spec=URLBaseDAO)
        dao.peek.return_value = URLRecordModel(shortcode='any', target='https://other.example.com')

        with pytest.raises(ShortcodeCollisionError):
            app.save_url_record(dao, TARGET_URL)

        assert dao.save.call_count == 12
