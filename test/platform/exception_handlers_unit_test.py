from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import BaseModel
import pytest

from src.platform.exception.exception_handlers import register_exception_handlers
from src.platform.exception.exceptions import NotFoundError
from src.service.course_booking.domain.reservation_errors import CapacityExhaustedError


class _Body(BaseModel):
    seats: int


@pytest.fixture
def app_client() -> TestClient:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get('/missing')
    async def missing():
        raise NotFoundError('Course not found')

    @app.get('/full')
    async def full():
        raise CapacityExhaustedError()

    @app.get('/value')
    async def value():
        raise ValueError('bad value')

    @app.get('/boom')
    async def boom():
        raise RuntimeError('unexpected')

    @app.post('/body')
    async def body(payload: _Body):
        return payload

    return TestClient(app, raise_server_exceptions=False)


@pytest.mark.unit
class TestExceptionHandlers:
    def test_custom_error_carries_status_and_code(self, app_client):
        response = app_client.get('/missing')

        assert response.status_code == 404
        assert response.json() == {'detail': 'Course not found', 'code': 'NOT_FOUND'}

    def test_subclass_code_wins(self, app_client):
        response = app_client.get('/full')

        assert response.status_code == 409
        assert response.json()['code'] == 'CAPACITY_EXHAUSTED'

    def test_value_error_is_bad_request(self, app_client):
        response = app_client.get('/value')

        assert response.status_code == 400
        assert response.json() == {'detail': 'bad value', 'code': 'VALUE_ERROR'}

    def test_request_validation_is_bad_request(self, app_client):
        response = app_client.post('/body', json={'seats': 'many'})

        assert response.status_code == 400
        assert response.json()['code'] == 'VALIDATION_ERROR'
        assert response.json()['detail'][0]['loc'] == ['body', 'seats']

    def test_unhandled_error_hides_details(self, app_client):
        response = app_client.get('/boom')

        assert response.status_code == 500
        assert response.json() == {'detail': 'Internal server error', 'code': 'INTERNAL_ERROR'}
