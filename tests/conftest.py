from datetime import timedelta

import pytest

from solosphere import create_app, db
from solosphere.fields import format_datetime, utcnow
from solosphere.models import JobModel


@pytest.fixture
def app():
    app = create_app('testing')
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    def _login(email):
        response = client.post('/jwt', json={'email': email})
        assert response.status_code == 200
        return response
    return _login


def job_payload(**overrides):
    payload = {
        'title': 'Build a landing page',
        'category': 'Web Development',
        'deadline': format_datetime(utcnow() + timedelta(days=10)),
        'min_price': 100,
        'max_price': 500,
        'description': 'A responsive landing page',
        'buyer': {
            'name': 'Buyer One',
            'email': 'buyer@example.com',
            'photo': 'https://example.com/buyer.png',
        },
        'bid_count': 0,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def add_job(client):
    def _add_job(**overrides):
        response = client.post('/add-job', json=job_payload(**overrides))
        assert response.status_code == 200
        return response.get_json()['insertedId']
    return _add_job


@pytest.fixture
def get_job(app):
    def _get_job(job_id):
        with app.app_context():
            return db.session.get(JobModel, job_id)
    return _get_job


@pytest.fixture
def make_job():
    return job_payload
