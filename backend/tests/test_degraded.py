from sqlalchemy.exc import OperationalError

from arenahub.errors import StoreUnavailable
from arenahub.store import StoreHealth


def _boom(*args, **kwargs):
    raise StoreUnavailable('test', 'connection refused')


def test_leaderboard_read_degrades_to_empty(client, service, monkeypatch):
    monkeypatch.setattr(service.store, 'top_n', _boom)
    res = client.get('/leaderboard?game=roninoid')
    assert res.status_code == 200
    assert res.get_json() == {'success': True, 'game': 'roninoid', 'leaderboard': [], 'degraded': True}


def test_profile_read_degrades_to_zeroed(client, service, monkeypatch):
    monkeypatch.setattr(service.store, 'get_profile', _boom)
    res = client.get('/profile/0xABC')
    assert res.status_code == 200
    data = res.get_json()
    assert data['degraded'] is True
    assert data['profile']['gamesPlayed'] == 0


def test_mutations_surface_store_failure(client, service, monkeypatch):
    monkeypatch.setattr(service.store, 'append', _boom)
    monkeypatch.setattr(service.store, 'clear_and_log', _boom)
    monkeypatch.setattr(service.store, 'last_reset', _boom)

    res = client.post('/submit-score', json={'playerName': 'Bob', 'score': 1})
    assert res.status_code == 500
    assert res.get_json() == {'success': False, 'error': 'Storage unavailable'}

    res = client.post('/admin/reset', json={'game': 'roninoid', 'password': 'letmein'})
    assert res.status_code == 500

    res = client.get('/admin/last-reset?game=roninoid')
    assert res.status_code == 500


def test_health_reports_unavailable_store(client, service, monkeypatch):
    monkeypatch.setattr(service.store, 'health', lambda: StoreHealth.UNAVAILABLE)
    res = client.get('/health')
    assert res.status_code == 503
    assert res.get_json()['store'] == 'unavailable'


def test_sql_errors_become_store_unavailable(sql_app, monkeypatch):
    from arenahub import db
    from arenahub.store.sql import SqlStore

    def _fail(*args, **kwargs):
        raise OperationalError('SELECT', {}, Exception('db down'))

    store = SqlStore()
    monkeypatch.setattr(db.session, 'execute', _fail)
    assert store.health() is StoreHealth.UNAVAILABLE
