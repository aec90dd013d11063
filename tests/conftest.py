import os
import tempfile

import pytest

# Point the app at a throwaway database before anything imports config
_DB_DIR = tempfile.mkdtemp(prefix='finvision-tests-')
os.environ['FINVISION_DATABASE_URL'] = f"sqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ.setdefault('FINVISION_LOG_LEVEL', 'WARNING')


@pytest.fixture
def db():
    """Fresh tables for every test."""
    import models

    models.init_db(os.environ['FINVISION_DATABASE_URL'])
    engine = models.get_engine()
    models.Base.metadata.drop_all(engine)
    models.Base.metadata.create_all(engine)
    yield models
    engine.dispose()


@pytest.fixture
def client(db):
    from app import app

    app.config['TESTING'] = True
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture
def signed_in(client):
    """A client logged in as a fresh user."""
    response = client.post('/api/auth/signup', json={
        'name': 'Asha',
        'email': 'asha@example.com',
        'password': 'secret123'
    })
    assert response.status_code == 201
    return client
